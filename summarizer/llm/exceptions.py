class SummarizationError(Exception):
    """Raised when a summary cannot be produced."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class SummarizationResponseError(SummarizationError):
    """Raised when the provider answers with a body that does not match the expected shape."""


class MissingCredentialsError(SummarizationError):
    """Raised when a provider is called without the credential it requires."""
