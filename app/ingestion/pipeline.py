from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from app.database.models import DocumentRecord
from app.enrichment.models import DocumentAnalysis
from app.ingestion.models import SubmissionRequest
from app.storage.models import StoredObjectRef


@dataclass(slots=True)
class IngestionContext:
    request: SubmissionRequest
    stored_object: StoredObjectRef | None = None
    record: DocumentRecord | None = None
    extracted_text: str = ""
    analysis: DocumentAnalysis | None = None
    error_message: str = ""


class PipelineStep(ABC):
    """One stage of the ingestion pipeline.

    A best-effort step's failure is logged and absorbed by the orchestrator;
    any other step's failure aborts the request. In both cases on_failure
    runs first, so a step can compensate for what it left behind.
    """

    name: ClassVar[str] = "step"
    best_effort: ClassVar[bool] = False

    @abstractmethod
    def run(self, context: IngestionContext) -> IngestionContext:
        raise NotImplementedError

    def on_failure(self, context: IngestionContext, exc: Exception) -> IngestionContext:
        return context
