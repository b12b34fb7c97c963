import hashlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from summarizer.llm.models import Credentials, Provider

PDF_MIME_TYPE = "application/pdf"


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStatus.SUCCESS, ProcessingStatus.ERROR)


@dataclass(frozen=True)
class SelectedFile:
    """A file chosen by the user for a batch."""

    path: Path
    name: str
    modified_at: int
    mime_type: str | None = None

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "SelectedFile":
        stat = path.stat()
        return cls(
            path=path,
            name=path.name,
            modified_at=stat.st_mtime_ns // 1_000_000,
            mime_type=mime_type,
        )

    @property
    def task_id(self) -> str:
        """Name and mtime, plus a path digest so same-named files in different folders differ."""
        digest = hashlib.sha1(str(self.path.resolve()).encode("utf-8")).hexdigest()[:8]
        return f"{self.name}-{self.modified_at}-{digest}"

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class FileTask:
    """Outcome record for one file of the current batch."""

    id: str
    file_name: str
    status: ProcessingStatus = ProcessingStatus.IDLE
    content: str = ""
    error: str | None = None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable view of the ledger handed to subscribers."""

    entries: tuple[FileTask, ...] = ()
    is_running: bool = False

    @property
    def successful(self) -> tuple[FileTask, ...]:
        return tuple(e for e in self.entries if e.status is ProcessingStatus.SUCCESS)


@dataclass(frozen=True)
class BatchConfig:
    """Per-batch choices made by the user. Never persisted."""

    provider: Provider
    prompt: str
    model: str | None = None
    credentials: Credentials = field(default_factory=Credentials)


@dataclass(frozen=True)
class FileSelection:
    """Result of filtering a user selection down to PDF files."""

    files: tuple[SelectedFile, ...]
    ignored: tuple[Path, ...] = ()
