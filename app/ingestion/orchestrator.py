from app.config.settings import Settings
from app.database.models import DocumentRecord
from app.database.repositories.documents_repository import DocumentsRepository
from app.enrichment.base import BaseEnricher
from app.ingestion.exceptions import PersistenceFailedError
from app.ingestion.models import SubmissionRequest
from app.ingestion.pipeline import IngestionContext, PipelineStep
from app.ingestion.retry import RetryPolicy
from app.ingestion.steps import (
    CompleteRecordStep,
    EnrichRecordStep,
    PersistRecordStep,
    UploadObjectStep,
    ValidateSubmissionStep,
)
from app.ingestion.validator import SubmissionValidator
from app.logging.logger import Log
from app.storage.base import BaseObjectStore


class IngestionOrchestrator:
    """Runs a submission through validate -> upload -> persist -> enrich, in order.

    Storage and persistence are required; enrichment is advisory. A failure in
    a required step raises an IngestError to the caller. A failure in a
    best-effort step is logged and the step's failure handler records it on
    the document instead.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def ingest(self, request: SubmissionRequest) -> DocumentRecord:
        """Ingest one submission and return the document as last committed.

        Raises:
            InvalidInputError: the submission failed validation.
            StorageFailedError: the object store upload failed.
            PersistenceFailedError: the record insert failed.
        """
        file_name = request.file.name if request.file else None
        Log.info(f"Ingesting submission {request.title!r} (file={file_name!r})")
        context = IngestionContext(request=request)

        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                if step.best_effort:
                    Log.warning(f"Step '{step.name}' failed, continuing: {exc}")
                    context = step.on_failure(context, exc)
                    continue
                Log.warning(f"Ingestion aborted at step '{step.name}': {exc}")
                step.on_failure(context, exc)
                raise

        if context.record is None:
            raise PersistenceFailedError("Ingestion finished without a document record")
        return context.record


def build_ingestion_orchestrator(
    settings: Settings,
    *,
    object_store: BaseObjectStore,
    doc_repo: DocumentsRepository,
    enricher: BaseEnricher | None,
) -> IngestionOrchestrator:
    """Build an IngestionOrchestrator; without an enricher, documents are completed unenriched."""
    final_step: PipelineStep
    if enricher is None:
        final_step = CompleteRecordStep(doc_repo)
    else:
        final_step = EnrichRecordStep(
            object_store=object_store,
            enricher=enricher,
            doc_repo=doc_repo,
            retry_policy=RetryPolicy.from_settings(settings),
        )
    steps: list[PipelineStep] = [
        ValidateSubmissionStep(SubmissionValidator(settings.max_file_size_bytes)),
        UploadObjectStep(object_store, settings.google_drive_folder_id),
        PersistRecordStep(doc_repo, object_store),
        final_step,
    ]
    return IngestionOrchestrator(steps)
