"""Per-file outcome records for the current batch."""

from collections.abc import Callable, Sequence
from dataclasses import replace

from summarizer.batch.exceptions import LedgerError
from summarizer.batch.models import (
    FileTask,
    LedgerSnapshot,
    ProcessingStatus,
    SelectedFile,
)
from summarizer.logging.logger import Log

Listener = Callable[[LedgerSnapshot], None]


class ResultLedger:
    """Ordered FileTask records with a single writer and snapshot subscribers.

    ``start`` replaces the previous batch wholesale. After that the entry count
    is fixed and each entry moves from PROCESSING to SUCCESS or ERROR once.
    Every change publishes a new immutable ``LedgerSnapshot``.
    """

    def __init__(self) -> None:
        self._entries: tuple[FileTask, ...] = ()
        self._is_running = False
        self._listeners: list[Listener] = []

    @property
    def is_running(self) -> bool:
        return self._is_running

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(entries=self._entries, is_running=self._is_running)

    def successful(self) -> tuple[FileTask, ...]:
        return self.snapshot().successful

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self, files: Sequence[SelectedFile]) -> None:
        if self._is_running:
            raise LedgerError("A batch is already running")
        self._entries = tuple(
            FileTask(id=f.task_id, file_name=f.name, status=ProcessingStatus.PROCESSING)
            for f in files
        )
        self._is_running = True
        self._publish()

    def reset(self) -> None:
        if self._is_running:
            raise LedgerError("Cannot reset the ledger while a batch is running")
        self._entries = ()
        self._publish()

    def mark_success(self, index: int, content: str) -> None:
        if not content:
            raise LedgerError("A successful entry needs non-empty content")
        self._transition(index, status=ProcessingStatus.SUCCESS, content=content)

    def mark_error(self, index: int, error: str) -> None:
        self._transition(index, status=ProcessingStatus.ERROR, error=error)

    def finish(self) -> None:
        self._is_running = False
        self._publish()

    def _transition(self, index: int, **changes: object) -> None:
        if not self._is_running:
            raise LedgerError("No batch is running")
        if not 0 <= index < len(self._entries):
            raise LedgerError(f"No ledger entry at index {index}")
        current = self._entries[index]
        if current.status.is_terminal:
            raise LedgerError(
                f"Entry {current.id} already finished with status {current.status.value}"
            )
        updated = replace(current, **changes)  # type: ignore[arg-type]
        self._entries = self._entries[:index] + (updated,) + self._entries[index + 1 :]
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                Log.warning(f"Ledger listener failed: {exc}")
