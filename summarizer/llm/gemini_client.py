from google import genai
from google.genai import errors as genai_errors

from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.exceptions import SummarizationNetworkError, SummarizationResponseError
from summarizer.llm.models import Credentials, ProviderAvailability
from summarizer.logging.logger import Log


class GeminiClient(BaseSummaryClient):
    """Summarization client for Google Gemini models.

    The API key comes from configuration and is checked once, here. A client
    built without a key reports ``MISSING_CREDENTIALS`` and callers are expected
    to block the batch before calling ``summarize``.
    """

    provider_name = "gemini"

    def __init__(self, *, api_key: str, model_name: str) -> None:
        self._model_name = model_name
        self._client: genai.Client | None = None
        if api_key.strip():
            self._client = genai.Client(api_key=api_key.strip())
        else:
            Log.warning("GEMINI_API_KEY is not set; the gemini provider is disabled")

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def availability(self) -> ProviderAvailability:
        if self._client is None:
            return ProviderAvailability.MISSING_CREDENTIALS
        return ProviderAvailability.READY

    def _generate(self, prompt: str, credentials: Credentials) -> str:
        _ = credentials
        if self._client is None:
            raise SummarizationNetworkError("The Gemini API key is not configured.")
        Log.debug(f"Gemini request: model={self._model_name}, {len(prompt)} prompt chars")
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=prompt,
            )
        except genai_errors.APIError as exc:
            raise SummarizationNetworkError(
                f"Error during summary generation: {exc}"
            ) from exc

        text = response.text
        if not text:
            raise SummarizationResponseError("Gemini returned an empty response")
        return text
