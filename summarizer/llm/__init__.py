from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.factory import SummaryClientFactory
from summarizer.llm.models import Credentials, Provider, ProviderAvailability, SummaryResult
from summarizer.llm.prompt_builder import PromptBuilder

__all__ = [
    "BaseSummaryClient",
    "Credentials",
    "PromptBuilder",
    "Provider",
    "ProviderAvailability",
    "SummaryClientFactory",
    "SummaryResult",
]
