from pathlib import Path
from unittest.mock import MagicMock

import pytest

from app.enrichment.client_base import BaseEnrichmentClient
from app.enrichment.enricher import Enricher, find_json_object, parse_embedded_json
from app.enrichment.exceptions import (
    EnrichmentError,
    EnrichmentResponseError,
    EnrichmentValidationError,
)


def _make_client(raw: str) -> MagicMock:
    client = MagicMock(spec=BaseEnrichmentClient)
    client.create_chat_completion.return_value = raw
    return client


class TestFindJsonObject:
    def test_finds_object_surrounded_by_prose(self) -> None:
        raw = 'Sure! Here you go: {"summary": "s"} Let me know.'
        assert find_json_object(raw) == '{"summary": "s"}'

    def test_finds_object_inside_code_fence(self) -> None:
        raw = '```json\n{"summary": "s"}\n```'
        assert find_json_object(raw) == '{"summary": "s"}'

    def test_keeps_nested_objects(self) -> None:
        raw = 'x {"a": {"b": 1}} y {"c": 2}'
        assert find_json_object(raw) == '{"a": {"b": 1}}'

    def test_ignores_braces_inside_strings(self) -> None:
        raw = '{"summary": "uses } and { freely", "x": "\\"}"}'
        assert find_json_object(raw) == raw

    def test_returns_none_without_object(self) -> None:
        assert find_json_object("no json here") is None

    def test_returns_none_when_unbalanced(self) -> None:
        assert find_json_object('{"summary": "s"') is None


class TestParseEmbeddedJson:
    def test_parses_first_object(self) -> None:
        assert parse_embedded_json('Answer: {"summary": "s", "keywords": ["k"]}') == {
            "summary": "s",
            "keywords": ["k"],
        }

    def test_raises_when_no_object(self) -> None:
        with pytest.raises(EnrichmentResponseError, match="no JSON object found"):
            parse_embedded_json("I cannot help with that.")

    def test_raises_on_invalid_json(self) -> None:
        with pytest.raises(EnrichmentResponseError, match="Invalid JSON response"):
            parse_embedded_json("{summary: s}")


class TestEnricher:
    def test_returns_analysis(self) -> None:
        client = _make_client('{"summary": "Invoice", "category": "finance", "keywords": ["acme"]}')
        enricher = Enricher(client=client, model="m")

        analysis = enricher.analyze("Invoice from ACME")

        assert analysis.summary == "Invoice"
        assert analysis.category == "finance"
        assert analysis.keywords == ["acme"]

    def test_prompt_contains_document_text(self) -> None:
        client = _make_client('{"summary": "s"}')
        enricher = Enricher(client=client, model="m", temperature=0.3)

        enricher.analyze("Invoice from ACME")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert "Invoice from ACME" in kwargs["user_prompt"]
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.3

    def test_truncates_long_input(self) -> None:
        client = _make_client('{"summary": "s"}')
        enricher = Enricher(client=client, model="m", max_input_chars=10)

        enricher.analyze("0123456789ABCDEF")

        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "0123456789" in prompt
        assert "ABCDEF" not in prompt

    def test_clamps_temperature(self) -> None:
        client = _make_client('{"summary": "s"}')
        Enricher(client=client, model="m", temperature=3.0).analyze("text")
        assert client.create_chat_completion.call_args.kwargs["temperature"] == 1.0

    def test_uses_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Summarize: {document_text}", encoding="utf-8")
        client = _make_client('{"summary": "s"}')

        Enricher(client=client, model="m", prompt_template_path=template).analyze("abc")

        assert client.create_chat_completion.call_args.kwargs["user_prompt"] == "Summarize: abc"

    def test_missing_prompt_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(EnrichmentError, match="Failed to load prompt template"):
            Enricher(client=_make_client(""), model="m", prompt_template_path=tmp_path / "nope.txt")

    def test_unparsable_answer_raises(self) -> None:
        enricher = Enricher(client=_make_client("no idea"), model="m")
        with pytest.raises(EnrichmentResponseError):
            enricher.analyze("text")

    def test_answer_without_summary_raises(self) -> None:
        enricher = Enricher(client=_make_client('{"keywords": ["k"]}'), model="m")
        with pytest.raises(EnrichmentValidationError, match="summary"):
            enricher.analyze("text")
