from app.enrichment.base import BaseEnricher
from app.enrichment.enricher import Enricher
from app.enrichment.factory import EnricherFactory
from app.enrichment.models import DocumentAnalysis

__all__ = ["BaseEnricher", "DocumentAnalysis", "Enricher", "EnricherFactory"]
