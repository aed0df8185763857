"""AI-powered document classifier and summarizer."""

import json
from pathlib import Path

from app.enrichment.base import BaseEnricher
from app.enrichment.client_base import BaseEnrichmentClient
from app.enrichment.exceptions import EnrichmentResponseError
from app.enrichment.models import DocumentAnalysis
from app.enrichment.prompt_loader import load_prompt_template
from app.enrichment.validator import validate_and_build
from app.logging.logger import Log

DEFAULT_MAX_INPUT_CHARS = 30000


class Enricher(BaseEnricher):
    """Analyzes document text with a generative model and parses its answer."""

    def __init__(
        self,
        *,
        client: BaseEnrichmentClient,
        model: str,
        temperature: float = 0.2,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        prompt_template_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_input_chars = max_input_chars
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)

    def analyze(self, text: str) -> DocumentAnalysis:
        prompt = self._build_prompt(text)
        Log.debug(f"Enrichment prompt:\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(parse_embedded_json(raw_response))
        Log.info(
            f"Enrichment complete: category={result.category!r}, "
            f"{len(result.keywords)} keywords"
        )
        return result

    def _build_prompt(self, text: str) -> str:
        if len(text) > self._max_input_chars:
            Log.info(f"Truncating enrichment input from {len(text)} to {self._max_input_chars} chars")
            text = text[: self._max_input_chars]
        return self._prompt_template.format(document_text=text)


def find_json_object(raw: str) -> str | None:
    """Return the first balanced {...} substring of raw, or None.

    Braces inside JSON string literals do not count towards the balance.
    """
    start = raw.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(raw)):
        char = raw[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return raw[start : index + 1]
    return None


def parse_embedded_json(raw: str) -> dict[str, object]:
    """Parse the first JSON object embedded in free text.

    Raises:
        EnrichmentResponseError: if no object is found or it is not valid JSON.
    """
    candidate = find_json_object(raw)
    if candidate is None:
        raise EnrichmentResponseError("Invalid response format: no JSON object found")
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise EnrichmentResponseError(f"Invalid JSON response: {exc}") from exc
    return parsed
