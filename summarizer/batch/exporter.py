import io
import zipfile
from collections.abc import Iterable
from pathlib import Path

from summarizer.batch.exceptions import ExportError
from summarizer.batch.ledger import ResultLedger
from summarizer.batch.models import FileTask, ProcessingStatus
from summarizer.logging.logger import Log

DEFAULT_ARCHIVE_NAME = "pdf_summaries.zip"
NOTHING_TO_EXPORT_MESSAGE = "No successful summaries to download."
STILL_RUNNING_MESSAGE = "Summaries can be downloaded once the batch has finished."


def summary_file_name(file_name: str) -> str:
    """Map ``report.pdf`` to ``report.txt``; names without a .pdf suffix gain .txt."""
    if file_name.lower().endswith(".pdf"):
        return file_name[:-4] + ".txt"
    return file_name + ".txt"


def _unique_name(name: str, used: set[str]) -> str:
    if name not in used:
        return name
    stem, suffix = name[:-4], name[-4:]
    counter = 2
    while f"{stem} ({counter}){suffix}" in used:
        counter += 1
    return f"{stem} ({counter}){suffix}"


class ArchiveExporter:
    """Packages every successful summary of a finished batch into one ZIP file."""

    def __init__(self, archive_name: str = DEFAULT_ARCHIVE_NAME) -> None:
        self._archive_name = archive_name

    def build(self, entries: Iterable[FileTask]) -> bytes:
        """Return a ZIP archive holding one .txt file per successful entry."""
        used: set[str] = set()
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in entries:
                if entry.status is not ProcessingStatus.SUCCESS:
                    continue
                name = _unique_name(summary_file_name(entry.file_name), used)
                used.add(name)
                archive.writestr(name, entry.content.encode("utf-8"))
        return buf.getvalue()

    def export(self, ledger: ResultLedger, destination: Path) -> Path:
        """Write the archive for a finished batch into ``destination``.

        Returns:
            Path of the written archive.

        Raises:
            ExportError: if the batch is still running or nothing succeeded.
        """
        snapshot = ledger.snapshot()
        if snapshot.is_running:
            raise ExportError(STILL_RUNNING_MESSAGE)
        if not snapshot.successful:
            raise ExportError(NOTHING_TO_EXPORT_MESSAGE)

        payload = self.build(snapshot.successful)
        destination.mkdir(parents=True, exist_ok=True)
        archive_path = destination / self._archive_name
        archive_path.write_bytes(payload)
        Log.info(
            f"Exported {len(snapshot.successful)} summaries to {archive_path}"
        )
        return archive_path
