"""Validates the parsed model answer and builds a DocumentAnalysis."""

from typing import Any

from app.enrichment.exceptions import EnrichmentValidationError
from app.enrichment.models import DocumentAnalysis

_VALID_PRIORITIES = frozenset({"low", "medium", "high"})
_MAX_LIST_ITEMS = 20


def validate_and_build(data: dict[str, Any]) -> DocumentAnalysis:
    """Validate a parsed analysis object.

    The model may name list fields in camelCase ("suggestedTags",
    "actionItems") or snake_case; both are accepted. An unknown priority is
    dropped rather than rejected.

    Raises:
        EnrichmentValidationError: on any validation failure.
    """
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise EnrichmentValidationError("'summary' must be a non-empty string")
    return DocumentAnalysis(
        summary=summary.strip(),
        category=_optional_string(data.get("category"), "category"),
        priority=_build_priority(data.get("priority")),
        tags=_string_list(_first_present(data, "suggestedTags", "tags"), "tags"),
        keywords=_string_list(data.get("keywords"), "keywords"),
        action_items=_string_list(
            _first_present(data, "actionItems", "action_items"), "actionItems"
        ),
    )


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_string(raw: Any, name: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise EnrichmentValidationError(f"'{name}' must be a string or null")
    return raw.strip() or None


def _build_priority(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    priority = raw.strip().lower()
    return priority if priority in _VALID_PRIORITIES else None


def _string_list(raw: Any, name: str) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise EnrichmentValidationError(f"'{name}' must be a list")
    items: list[str] = []
    for index, item in enumerate(raw[:_MAX_LIST_ITEMS]):
        if not isinstance(item, str):
            raise EnrichmentValidationError(f"'{name}' item at index {index} must be a string")
        if item.strip():
            items.append(item.strip())
    return items
