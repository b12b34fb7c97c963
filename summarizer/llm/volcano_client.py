import httpx
import openai

from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.exceptions import (
    MissingCredentialsError,
    SummarizationNetworkError,
    SummarizationResponseError,
)
from summarizer.llm.models import Credentials
from summarizer.logging.logger import Log

DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
DEFAULT_MODEL_ID = "ep-20250718110917-jckmt"
ERROR_PREFIX = "Error during Volcano Engine summary generation: "
INVALID_STRUCTURE_MESSAGE = "Received an invalid response structure from the API."


class VolcanoClient(BaseSummaryClient):
    """Summarization client for the Volcano Engine Ark chat-completions API.

    Ark is OpenAI-compatible, so requests go through the OpenAI SDK pointed at
    the Ark base URL. The bearer key is supplied by the user per batch.
    """

    provider_name = "volcano"

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model_id: str = DEFAULT_MODEL_ID,
        timeout_seconds: float | None = 60,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._model_id = model_id
        # The real key is attached per call; batches are never retried.
        self._client = openai.OpenAI(
            api_key="",
            base_url=base_url,
            timeout=timeout_seconds or None,
            max_retries=0,
            http_client=http_client,
        )

    def is_ready(self, credentials: Credentials | None = None) -> bool:
        return credentials is not None and bool(credentials.api_key.strip())

    def close(self) -> None:
        self._client.close()

    def _generate(self, prompt: str, credentials: Credentials) -> str:
        if not credentials.api_key.strip():
            raise MissingCredentialsError(
                "Error: Volcano Engine API Key is required but was not provided."
            )

        Log.debug(f"Volcano request: model={self._model_id}, {len(prompt)} prompt chars")
        try:
            client = self._client.with_options(api_key=credentials.api_key)
            response = client.chat.completions.create(
                model=self._model_id,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as exc:
            raise SummarizationNetworkError(
                ERROR_PREFIX + self._status_error_message(exc)
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(f"{ERROR_PREFIX}{exc}") from exc
        except openai.APIError as exc:
            raise SummarizationResponseError(f"{ERROR_PREFIX}{exc}") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise SummarizationResponseError(ERROR_PREFIX + INVALID_STRUCTURE_MESSAGE)
        content = getattr(getattr(choices[0], "message", None), "content", None)
        if not isinstance(content, str) or not content:
            raise SummarizationResponseError(ERROR_PREFIX + INVALID_STRUCTURE_MESSAGE)
        return content

    @staticmethod
    def _status_error_message(exc: openai.APIStatusError) -> str:
        # The SDK usually unwraps the body to its "error" object already.
        body = exc.body
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            body = body["error"]
        message = body.get("message") if isinstance(body, dict) else None
        if isinstance(message, str) and message.strip():
            return message
        return f"API request failed with status {exc.status_code}"
