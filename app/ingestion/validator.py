"""Structural checks on an incoming submission, run before any network call."""

from app.ingestion.models import FieldError, SubmissionRequest, ValidationResult

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

ALLOWED_FILE_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
})

ALLOWED_PRIORITIES = ("low", "medium", "high")

_REQUIRED_FIELDS = ("title", "description", "document_type", "priority")


class SubmissionValidator:
    """Pure validator for SubmissionRequest. Never raises, never performs I/O."""

    def __init__(
        self,
        max_file_size_bytes: int = MAX_FILE_SIZE_BYTES,
        allowed_types: frozenset[str] = ALLOWED_FILE_TYPES,
    ) -> None:
        self._max_file_size_bytes = max_file_size_bytes
        self._allowed_types = allowed_types

    def validate(self, request: SubmissionRequest) -> ValidationResult:
        """Return every missing field at once; type and size are checked only
        when all required fields are present."""
        errors = self._missing_fields(request)
        file = request.file
        if errors or file is None:
            return ValidationResult(errors=errors)

        if request.priority not in ALLOWED_PRIORITIES:
            errors.append(FieldError(
                "priority",
                f"Priority must be one of {list(ALLOWED_PRIORITIES)}",
            ))

        if file.mime_type not in self._allowed_types:
            errors.append(FieldError(
                "file.type",
                f"File type '{file.mime_type}' is not allowed",
            ))

        size = max(file.size, len(file.content))
        if file.size < 0:
            errors.append(FieldError("file.size", "File size must not be negative"))
        elif size > self._max_file_size_bytes:
            errors.append(FieldError(
                "file.size",
                f"File too large: {size} bytes (max {self._max_file_size_bytes})",
            ))

        return ValidationResult(errors=errors)

    @staticmethod
    def _missing_fields(request: SubmissionRequest) -> list[FieldError]:
        errors: list[FieldError] = []
        for name in _REQUIRED_FIELDS:
            value = getattr(request, name)
            if not isinstance(value, str) or not value.strip():
                label = name.replace("_", " ").capitalize()
                errors.append(FieldError(name, f"{label} is required"))

        if request.file is None:
            errors.append(FieldError("file", "File is required"))
            return errors
        if not request.file.name.strip():
            errors.append(FieldError("file.name", "File name is required"))
        if not request.file.mime_type.strip():
            errors.append(FieldError("file.type", "File type is required"))
        if not request.file.content:
            errors.append(FieldError("file.content", "File content is required"))
        return errors
