from dataclasses import dataclass, field


@dataclass(frozen=True)
class FilePayload:
    """Uploaded file as received from the client."""

    name: str
    mime_type: str
    size: int
    content: bytes


@dataclass(frozen=True)
class SubmissionRequest:
    """One ingestion request. Transient, never persisted directly."""

    title: str
    description: str
    document_type: str
    priority: str
    file: FilePayload | None
    tags: list[str] = field(default_factory=list)
    created_by: str | None = None


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of submission validation: ok, or the list of offending fields."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def reason(self) -> str | None:
        return self.errors[0].reason if self.errors else None

    @property
    def offending_field(self) -> str | None:
        return self.errors[0].field if self.errors else None

    def as_dict(self) -> dict[str, str]:
        return {error.field: error.reason for error in self.errors}


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a deletion. object_deleted is None when no object was linked."""

    record_id: str
    object_deleted: bool | None
