class PipelineError(Exception):
    """Base exception for all ingestion and deletion pipeline errors."""


class IngestError(PipelineError):
    """Raised when an ingestion request cannot produce a document record."""


class DeleteError(PipelineError):
    """Raised when a deletion request cannot remove a document record."""


class InvalidInputError(IngestError):
    """Raised when a submission fails validation. No external call was made."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        first_field, first_reason = next(iter(errors.items()), ("", "invalid input"))
        self.offending_field = first_field
        self.reason = first_reason
        super().__init__(f"Invalid submission: {first_field}: {first_reason}")


class StorageFailedError(IngestError):
    """Raised when the object store upload fails. Nothing was committed."""


class PersistenceFailedError(IngestError, DeleteError):
    """Raised when the record store rejects an insert or delete."""


class DocumentNotFoundError(DeleteError):
    """Raised when a document cannot be found in the database."""
