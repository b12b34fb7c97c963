from summarizer.config.settings import Settings
from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.example_client import ExampleSummaryClient
from summarizer.llm.gemini_client import GeminiClient
from summarizer.llm.models import Provider
from summarizer.llm.volcano_client import VolcanoClient


class SummaryClientFactory:
    """Creates the summarization client for a provider from application settings."""

    @classmethod
    def create(
        cls,
        provider: Provider | str,
        settings: Settings,
        model: str | None = None,
    ) -> BaseSummaryClient:
        provider = cls.parse_provider(provider)
        if provider is Provider.EXAMPLE:
            return ExampleSummaryClient()
        if provider is Provider.GEMINI:
            model_name = model or settings.gemini_model_name
            if model_name not in settings.gemini_models:
                raise ValueError(
                    f"Unknown Gemini model '{model_name}'. Choose from: {settings.gemini_models}"
                )
            return GeminiClient(api_key=settings.gemini_api_key, model_name=model_name)
        return VolcanoClient(
            base_url=settings.volcano_base_url,
            model_id=settings.volcano_model_id,
            timeout_seconds=settings.volcano_timeout_seconds,
        )

    @staticmethod
    def parse_provider(provider: Provider | str) -> Provider:
        try:
            return Provider(provider.lower() if isinstance(provider, str) else provider)
        except ValueError:
            supported = [p.value for p in Provider]
            raise ValueError(
                f"Unknown summarization provider '{provider}'. Choose from: {supported}"
            ) from None
