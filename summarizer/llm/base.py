from abc import ABC, abstractmethod

from summarizer.llm.exceptions import SummarizationError
from summarizer.llm.models import Credentials, ProviderAvailability, SummaryResult
from summarizer.logging.logger import Log

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred during summary generation."


class BaseSummaryClient(ABC):
    """Contract for all summarization provider clients.

    Subclasses implement ``_generate`` and raise ``SummarizationError`` on any
    failure. ``summarize`` converts every raised exception into a failed
    ``SummaryResult`` so callers never see an exception from a provider.
    """

    provider_name: str = "base"

    @property
    def availability(self) -> ProviderAvailability:
        return ProviderAvailability.READY

    def is_ready(self, credentials: Credentials | None = None) -> bool:
        """Return True when a call with these credentials can be attempted."""
        _ = credentials
        return self.availability is ProviderAvailability.READY

    def close(self) -> None:
        """Release network resources held by the client."""

    def summarize(
        self,
        prompt: str,
        credentials: Credentials | None = None,
    ) -> SummaryResult:
        """Send a combined prompt to the provider.

        Args:
            prompt: Full instruction produced by the prompt builder.
            credentials: Per-batch credential, for providers that need one.

        Returns:
            SummaryResult with the generated text, or with an error message.
        """
        try:
            text = self._generate(prompt, credentials or Credentials())
        except SummarizationError as exc:
            Log.error(f"{self.provider_name} summarization failed: {exc}")
            return SummaryResult.failure(str(exc) or UNKNOWN_ERROR_MESSAGE)
        except Exception as exc:
            Log.exception(f"{self.provider_name} summarization raised unexpectedly")
            return SummaryResult.failure(
                f"Error during summary generation: {exc}" if str(exc) else UNKNOWN_ERROR_MESSAGE
            )
        return SummaryResult.success(text)

    @abstractmethod
    def _generate(self, prompt: str, credentials: Credentials) -> str:
        """Return the provider's generated text.

        Raises:
            SummarizationError: on any failure.
        """
