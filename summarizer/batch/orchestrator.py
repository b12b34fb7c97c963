from collections.abc import Sequence

from summarizer.batch.exceptions import BatchPreconditionError
from summarizer.batch.ledger import ResultLedger
from summarizer.batch.models import SelectedFile
from summarizer.llm.base import BaseSummaryClient
from summarizer.llm.models import Credentials
from summarizer.llm.prompt_builder import PromptBuilder
from summarizer.logging.logger import Log
from summarizer.pdf.base import BasePdfExtractor

ERROR_MARKER = "Error"
NO_SELECTION_MESSAGE = "Please select a folder with PDFs and enter a prompt."
MISSING_CREDENTIALS_MESSAGE = "The {provider} provider is missing its API key."
EMPTY_TEXT_MESSAGE = (
    "Could not extract any text from the PDF. It might be an image-only PDF."
)
EMPTY_SUMMARY_MESSAGE = "The model returned an empty summary."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class BatchOrchestrator:
    """Runs a batch: extract -> build prompt -> summarize, one file at a time.

    Files are processed strictly in selection order and never concurrently.
    A failure is recorded on that file's ledger entry and the loop moves on.
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        prompt_builder: PromptBuilder,
        ledger: ResultLedger,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._prompt_builder = prompt_builder
        self._ledger = ledger

    @property
    def ledger(self) -> ResultLedger:
        return self._ledger

    def run(
        self,
        files: Sequence[SelectedFile],
        prompt: str,
        client: BaseSummaryClient,
        credentials: Credentials | None = None,
    ) -> None:
        """Process every file and record its outcome in the ledger.

        Raises:
            BatchPreconditionError: before touching the ledger, if there are no
                files, the prompt is blank, or the client cannot be called.
        """
        self._check_preconditions(files, prompt, client, credentials)

        Log.info(f"Starting batch of {len(files)} file(s) with {client.provider_name}")
        self._ledger.start(files)
        try:
            for index, file in enumerate(files):
                self._process_file(index, file, prompt, client, credentials)
        finally:
            self._ledger.finish()

        succeeded = len(self._ledger.successful())
        Log.info(f"Batch finished: {succeeded}/{len(files)} succeeded")

    @staticmethod
    def _check_preconditions(
        files: Sequence[SelectedFile],
        prompt: str,
        client: BaseSummaryClient,
        credentials: Credentials | None,
    ) -> None:
        if not files or not prompt.strip():
            raise BatchPreconditionError(NO_SELECTION_MESSAGE)
        if not client.is_ready(credentials):
            raise BatchPreconditionError(
                MISSING_CREDENTIALS_MESSAGE.format(provider=client.provider_name)
            )

    def _process_file(
        self,
        index: int,
        file: SelectedFile,
        prompt: str,
        client: BaseSummaryClient,
        credentials: Credentials | None,
    ) -> None:
        try:
            text = self._pdf_extractor.extract(file.read_bytes())
            if not text.strip():
                self._fail(index, file, EMPTY_TEXT_MESSAGE)
                return
            Log.debug(f"Extracted {len(text)} chars from {file.name}")

            result = client.summarize(self._prompt_builder.build(prompt, text), credentials)
            if not result.ok:
                self._fail(index, file, result.error or UNKNOWN_ERROR_MESSAGE)
            elif not result.text:
                self._fail(index, file, EMPTY_SUMMARY_MESSAGE)
            elif result.text.startswith(ERROR_MARKER):
                self._fail(index, file, result.text)
            else:
                self._ledger.mark_success(index, result.text)
                Log.info(f"Summarized {file.name} ({len(result.text)} chars)")
        except Exception as exc:
            Log.exception(f"Failed to process {file.name}")
            self._fail(index, file, str(exc) or UNKNOWN_ERROR_MESSAGE)

    def _fail(self, index: int, file: SelectedFile, message: str) -> None:
        self._ledger.mark_error(index, message)
        Log.error(f"Failed to process {file.name}: {message}")
