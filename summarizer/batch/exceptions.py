class BatchError(Exception):
    """Base exception for all batch-related errors."""


class BatchPreconditionError(BatchError):
    """Raised when a batch cannot start (no files, blank prompt, missing credential)."""


class LedgerError(BatchError):
    """Raised when a ledger transition would break its invariants."""


class ExportError(BatchError):
    """Raised when there is nothing to export or the batch is still running."""
