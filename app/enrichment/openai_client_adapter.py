import httpx
import openai

from app.enrichment.client_base import BaseEnrichmentClient
from app.enrichment.exceptions import EnrichmentError, EnrichmentNetworkError


class OpenAIClientAdapter(BaseEnrichmentClient):
    """Enrichment client adapter built on the OpenAI-compatible chat API.

    Also serves Gemini through its OpenAI-compatible endpoint.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise EnrichmentNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 429 or exc.status_code >= 500:
                raise EnrichmentNetworkError(
                    f"AI provider unavailable: {exc}"
                ) from exc
            raise EnrichmentError(f"AI provider API error: {exc}") from exc
        except openai.APIError as exc:
            raise EnrichmentError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EnrichmentError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise EnrichmentError("AI returned empty response")
        return content
