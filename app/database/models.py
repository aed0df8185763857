from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class NewDocument:
    """Column values for a document row about to be inserted."""

    title: str
    description: str
    document_type: str
    priority: str
    tags: list[str]
    file_url: str
    file_name: str
    file_size: int
    file_type: str
    object_store_id: str
    object_store_url: str
    created_by: str | None = None


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    title: str
    description: str
    document_type: str
    priority: str
    status: str
    tags: list[str] = field(default_factory=list)
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    file_type: str | None = None
    object_store_id: str | None = None
    object_store_url: str | None = None
    ai_summary: str | None = None
    ai_keywords: list[str] | None = None
    ai_category: str | None = None
    ai_priority_suggestion: str | None = None
    ai_suggested_tags: list[str] | None = None
    ai_action_items: list[str] | None = None
    ai_extracted_text: str | None = None
    processing_status: str | None = None
    processing_error: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocumentRecord":
        """Build a record from a dict_row, ignoring columns the model does not carry."""
        values = {f.name: row[f.name] for f in fields(cls) if f.name in row}
        values["id"] = str(values["id"])
        if values.get("tags") is None:
            values["tags"] = []
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DOCUMENT_COLUMNS = tuple(f.name for f in fields(DocumentRecord))

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class DocumentFilters:
    """Listing filters. None means "do not filter on this column"."""

    document_type: str | None = None
    priority: str | None = None
    status: str | None = None
    created_by: str | None = None
    search: str | None = None
    limit: int = 20
    offset: int = 0
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def page_limit(self) -> int:
        """limit clamped to 1..MAX_PAGE_SIZE, the page size actually served."""
        return max(1, min(self.limit, MAX_PAGE_SIZE))

    @property
    def page_offset(self) -> int:
        return max(0, self.offset)
