from typing import ClassVar

from app.config.settings import Settings
from app.enrichment.base import BaseEnricher
from app.enrichment.client_base import BaseEnrichmentClient
from app.enrichment.enricher import Enricher
from app.enrichment.example_client_adapter import ExampleClientAdapter
from app.enrichment.openai_client_adapter import OpenAIClientAdapter


class EnricherFactory:
    """Creates the configured enricher, or None when enrichment is disabled."""

    PROVIDER_BASE_URLS: ClassVar[dict[str, str | None]] = {
        "openai": None,
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseEnricher | None:
        if not settings.enrichment_enabled:
            return None
        provider = settings.enrichment_provider.lower()
        return Enricher(
            client=cls._create_client(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.enrichment_temperature,
            max_input_chars=settings.enrichment_max_input_chars,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseEnrichmentClient:
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return OpenAIClientAdapter(
                api_key=settings.enrichment_gemini_api_key,
                timeout_seconds=settings.enrichment_gemini_timeout_seconds,
                base_url=cls.PROVIDER_BASE_URLS["gemini"],
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.enrichment_openai_api_key,
                timeout_seconds=settings.enrichment_openai_timeout_seconds,
                base_url=None,
            )
        if provider == "openai_compatible":
            url = settings.enrichment_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "enrichment_openai_compatible_base_url is required for "
                    "enrichment_provider=openai_compatible"
                )
            return OpenAIClientAdapter(
                api_key=settings.enrichment_openai_compatible_api_key,
                timeout_seconds=settings.enrichment_openai_compatible_timeout_seconds,
                base_url=url,
            )
        supported = ["example", "openai_compatible", *sorted(cls.PROVIDER_BASE_URLS)]
        raise ValueError(
            f"Unknown enrichment provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "example": "example",
            "gemini": settings.enrichment_gemini_model_name,
            "openai": settings.enrichment_openai_model_name,
            "openai_compatible": settings.enrichment_openai_compatible_model_name,
        }
        return key_map.get(provider, "") or ""
