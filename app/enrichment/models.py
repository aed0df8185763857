from dataclasses import dataclass, field


@dataclass(frozen=True)
class DocumentAnalysis:
    """Structured analysis of a document's text."""

    summary: str
    category: str | None = None
    priority: str | None = None
    tags: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)
