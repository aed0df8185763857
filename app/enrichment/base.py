from abc import ABC, abstractmethod

from app.enrichment.models import DocumentAnalysis


class BaseEnricher(ABC):
    """Contract for all enrichment adapters."""

    @abstractmethod
    def analyze(self, text: str) -> DocumentAnalysis:
        """Classify and summarize extracted document text.

        Args:
            text: Plain text exported from the stored document.

        Returns:
            DocumentAnalysis with summary, category, priority, tags and keywords.

        Raises:
            EnrichmentError: on any failure.
        """
