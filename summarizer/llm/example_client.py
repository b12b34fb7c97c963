"""Example summarization client.

Use this module as a reference when implementing new provider clients.
Implement BaseSummaryClient and register the provider in SummaryClientFactory.
"""

from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.models import Credentials


class ExampleSummaryClient(BaseSummaryClient):
    """Offline client that returns a fixed summary.

    No network calls. Useful for local development and tests.
    """

    provider_name = "example"

    SUMMARY_TEMPLATE = "Example summary ({length} prompt characters)."

    def _generate(self, prompt: str, credentials: Credentials) -> str:
        _ = credentials
        return self.SUMMARY_TEMPLATE.format(length=len(prompt))
