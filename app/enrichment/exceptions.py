class EnrichmentError(Exception):
    """Raised when document enrichment fails."""


class EnrichmentNetworkError(EnrichmentError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class EnrichmentResponseError(EnrichmentError):
    """Raised when the AI response carries no parsable JSON object."""


class EnrichmentValidationError(EnrichmentError):
    """Raised when the parsed analysis fails domain validation."""
