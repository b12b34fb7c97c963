from collections.abc import Callable, Iterable
from functools import partial
from pathlib import Path

from summarizer.batch.exceptions import BatchPreconditionError, ExportError
from summarizer.batch.exporter import ArchiveExporter
from summarizer.batch.ledger import ResultLedger
from summarizer.batch.models import BatchConfig, FileSelection, SelectedFile
from summarizer.batch.orchestrator import BatchOrchestrator
from summarizer.batch.selection import NON_PDF_NOTICE, select_pdf_files
from summarizer.config.settings import Settings
from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.factory import SummaryClientFactory
from summarizer.llm.models import Provider
from summarizer.llm.prompt_builder import PromptBuilder
from summarizer.logging.logger import Log
from summarizer.pdf.factory import PdfExtractorFactory

GEMINI_KEY_MISSING_BANNER = (
    "API Key Missing! The Gemini API key is not configured. "
    "The gemini provider will not work."
)
PROVIDER_DISABLED_MESSAGE = "The {provider} provider is not available."
BATCH_RUNNING_MESSAGE = "A batch is already running."

ClientFactory = Callable[[BatchConfig], BaseSummaryClient]


class BatchSession:
    """State a front end works with: selection, notice, banner and the ledger.

    Precondition and export problems never raise out of the session; they set
    ``notice`` instead, which stays until dismissed or replaced.
    """

    def __init__(
        self,
        *,
        orchestrator: BatchOrchestrator,
        exporter: ArchiveExporter,
        client_factory: ClientFactory,
        disabled_providers: Iterable[Provider] = (),
    ) -> None:
        self._orchestrator = orchestrator
        self._exporter = exporter
        self._client_factory = client_factory
        self._disabled = frozenset(disabled_providers)
        self._files: tuple[SelectedFile, ...] = ()
        self.notice = ""

    @property
    def ledger(self) -> ResultLedger:
        return self._orchestrator.ledger

    @property
    def files(self) -> tuple[SelectedFile, ...]:
        return self._files

    @property
    def banner(self) -> str | None:
        if Provider.GEMINI in self._disabled:
            return GEMINI_KEY_MISSING_BANNER
        return None

    def is_provider_enabled(self, provider: Provider) -> bool:
        return provider not in self._disabled

    def dismiss_notice(self) -> None:
        self.notice = ""

    def select(self, paths: Iterable[Path]) -> FileSelection:
        """Replace the selection with the PDF files among ``paths``.

        The previous batch's results are discarded. The selection cannot
        change while a batch is running.
        """
        if self.ledger.is_running:
            self._set_notice(BATCH_RUNNING_MESSAGE)
            return FileSelection(files=self._files)
        try:
            selection = select_pdf_files(paths)
        except OSError as exc:
            self._set_notice(str(exc))
            return FileSelection(files=self._files)
        self.ledger.reset()
        self._files = selection.files
        self.notice = NON_PDF_NOTICE if selection.ignored else ""
        if selection.ignored:
            Log.warning(f"{NON_PDF_NOTICE} ({len(selection.ignored)} ignored)")
        return selection

    def can_generate(self, config: BatchConfig) -> bool:
        if self.ledger.is_running or not self._files or not config.prompt.strip():
            return False
        if not self.is_provider_enabled(config.provider):
            return False
        if config.provider is Provider.VOLCANO:
            return bool(config.credentials.api_key.strip())
        return True

    def generate(self, config: BatchConfig) -> bool:
        """Run a batch over the current selection.

        Returns:
            True if the batch ran, False if a precondition blocked it.
        """
        if self.ledger.is_running:
            self._set_notice(BATCH_RUNNING_MESSAGE)
            return False
        self.notice = ""
        if not self.is_provider_enabled(config.provider):
            self._set_notice(PROVIDER_DISABLED_MESSAGE.format(provider=config.provider.value))
            return False
        try:
            client = self._client_factory(config)
        except ValueError as exc:
            self._set_notice(str(exc))
            return False
        try:
            self._orchestrator.run(self._files, config.prompt, client, config.credentials)
        except BatchPreconditionError as exc:
            self._set_notice(str(exc))
            return False
        finally:
            client.close()
        return True

    @property
    def can_download(self) -> bool:
        return not self.ledger.is_running and len(self.ledger) > 0

    def download(self, destination: Path) -> Path | None:
        """Write the archive of successful summaries; None (with a notice) if there are none."""
        try:
            return self._exporter.export(self.ledger, destination)
        except ExportError as exc:
            self._set_notice(str(exc))
            return None

    def _set_notice(self, message: str) -> None:
        self.notice = message
        Log.warning(f"Notice: {message}")


def _create_client(settings: Settings, config: BatchConfig) -> BaseSummaryClient:
    return SummaryClientFactory.create(config.provider, settings, model=config.model)


def build_session(
    settings: Settings,
    client_factory: ClientFactory | None = None,
) -> BatchSession:
    """Build a BatchSession with all required adapters."""
    ledger = ResultLedger()
    orchestrator = BatchOrchestrator(
        pdf_extractor=PdfExtractorFactory.create(settings),
        prompt_builder=PromptBuilder(),
        ledger=ledger,
    )
    disabled = [] if settings.gemini_api_key.strip() else [Provider.GEMINI]
    return BatchSession(
        orchestrator=orchestrator,
        exporter=ArchiveExporter(settings.archive_name),
        client_factory=client_factory or partial(_create_client, settings),
        disabled_providers=disabled,
    )
