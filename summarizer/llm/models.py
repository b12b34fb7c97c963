from dataclasses import dataclass
from enum import Enum


class Provider(str, Enum):
    """Summarization backends selectable for a batch."""

    GEMINI = "gemini"
    VOLCANO = "volcano"
    EXAMPLE = "example"


class ProviderAvailability(str, Enum):
    """Whether a client was composed with everything it needs to make calls."""

    READY = "ready"
    MISSING_CREDENTIALS = "missing_credentials"


@dataclass(frozen=True)
class Credentials:
    """Per-batch credential supplied by the user. Never persisted."""

    api_key: str = ""

    def __repr__(self) -> str:
        return f"Credentials(api_key={'***' if self.api_key else ''!r})"


@dataclass(frozen=True)
class SummaryResult:
    """Outcome of one summarize call: either text or an error message."""

    text: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, text: str) -> "SummaryResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "SummaryResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None
