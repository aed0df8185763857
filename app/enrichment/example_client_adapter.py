"""Offline enrichment client adapter.

Returns a canned free-text answer with an embedded JSON object, the same shape
a chat model produces. Useful for local development and as a template for new
provider adapters: implement BaseEnrichmentClient and register the provider
in EnricherFactory.
"""

import json
from typing import ClassVar

from app.enrichment.client_base import BaseEnrichmentClient


class ExampleClientAdapter(BaseEnrichmentClient):
    """Adapter that answers every prompt with a fixed analysis. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "category": "other",
        "priority": "medium",
        "suggestedTags": [],
        "summary": "No summary available.",
        "keywords": [],
        "actionItems": [],
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return f"Here is the analysis:\n{json.dumps(self.DEFAULT_RESPONSE)}"
