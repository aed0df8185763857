from app.database.models import NewDocument
from app.database.repositories.documents_repository import DocumentsRepository
from app.enrichment.base import BaseEnricher
from app.enrichment.exceptions import EnrichmentError, EnrichmentNetworkError
from app.ingestion.exceptions import (
    InvalidInputError,
    PersistenceFailedError,
    StorageFailedError,
)
from app.ingestion.models import FilePayload
from app.ingestion.pipeline import IngestionContext, PipelineStep
from app.ingestion.retry import RetryPolicy, retrying
from app.ingestion.validator import SubmissionValidator
from app.logging.logger import Log
from app.storage.base import BaseObjectStore
from app.storage.exceptions import StorageError, StorageNetworkError


class ValidateSubmissionStep(PipelineStep):
    name = "validate"

    def __init__(self, validator: SubmissionValidator) -> None:
        self._validator = validator

    def run(self, context: IngestionContext) -> IngestionContext:
        result = self._validator.validate(context.request)
        if not result.ok:
            raise InvalidInputError(result.as_dict())
        return context


class UploadObjectStep(PipelineStep):
    name = "upload"

    def __init__(self, object_store: BaseObjectStore, parent_folder: str | None) -> None:
        self._object_store = object_store
        self._parent_folder = parent_folder or None

    def run(self, context: IngestionContext) -> IngestionContext:
        file = _require_file(context)
        try:
            context.stored_object = self._object_store.upload(
                file.name,
                file.mime_type,
                file.content,
                self._parent_folder,
            )
        except StorageError as exc:
            raise StorageFailedError(f"Failed to upload file to object store: {exc}") from exc
        Log.info(
            f"Stored '{file.name}' ({context.stored_object.byte_size} bytes) "
            f"as object {context.stored_object.object_id}"
        )
        return context


class PersistRecordStep(PipelineStep):
    """Inserts the pending record. On failure, deletes the just-uploaded object."""

    name = "persist"

    def __init__(self, doc_repo: DocumentsRepository, object_store: BaseObjectStore) -> None:
        self._doc_repo = doc_repo
        self._object_store = object_store

    def run(self, context: IngestionContext) -> IngestionContext:
        stored = context.stored_object
        if stored is None:
            raise ValueError("IngestionContext.stored_object must be set before persist")
        file = _require_file(context)
        request = context.request
        new_document = NewDocument(
            title=request.title.strip(),
            description=request.description.strip(),
            document_type=request.document_type,
            priority=request.priority,
            tags=list(request.tags),
            file_url=stored.view_url,
            file_name=file.name,
            file_size=file.size,
            file_type=file.mime_type,
            object_store_id=stored.object_id,
            object_store_url=stored.view_url,
            created_by=request.created_by,
        )
        try:
            context.record = self._doc_repo.insert(new_document)
        except Exception as exc:
            raise PersistenceFailedError(f"Failed to create document record: {exc}") from exc
        Log.info(f"Created document {context.record.id} (pending)")
        return context

    def on_failure(self, context: IngestionContext, exc: Exception) -> IngestionContext:
        stored = context.stored_object
        if stored is None:
            return context
        try:
            self._object_store.delete(stored.object_id)
            Log.info(f"Rolled back object {stored.object_id} after failed insert")
        except Exception as rollback_exc:
            Log.error(f"Rollback of object {stored.object_id} failed: {rollback_exc}")
        return context


class EnrichRecordStep(PipelineStep):
    """Exports text, analyzes it and writes the enrichment fields.

    Export and analysis are retried on transient errors only. Any failure ends
    in a degraded update that completes the record with the error recorded.
    """

    name = "enrich"
    best_effort = True

    def __init__(
        self,
        object_store: BaseObjectStore,
        enricher: BaseEnricher,
        doc_repo: DocumentsRepository,
        retry_policy: RetryPolicy,
    ) -> None:
        self._object_store = object_store
        self._enricher = enricher
        self._doc_repo = doc_repo
        self._retry_policy = retry_policy

    def run(self, context: IngestionContext) -> IngestionContext:
        record = context.record
        if record is None or not record.object_store_id:
            raise ValueError("IngestionContext.record must be persisted before enrichment")

        context.extracted_text = retrying(self._retry_policy, (StorageNetworkError,))(
            self._object_store.export_text, record.object_store_id
        )
        if not context.extracted_text.strip():
            raise EnrichmentError("No text could be extracted from the document")
        Log.info(f"Extracted {len(context.extracted_text)} chars from document {record.id}")

        context.analysis = retrying(self._retry_policy, (EnrichmentNetworkError,))(
            self._enricher.analyze, context.extracted_text
        )
        context.record = self._doc_repo.update_enrichment(
            record.id,
            context.extracted_text,
            context.analysis,
        )
        Log.info(f"Document {record.id} enriched and completed")
        return context

    def on_failure(self, context: IngestionContext, exc: Exception) -> IngestionContext:
        if context.record is None:
            return context
        context.error_message = str(exc) or type(exc).__name__
        try:
            context.record = self._doc_repo.mark_enrichment_failed(
                context.record.id, context.error_message
            )
            Log.info(f"Document {context.record.id} completed with enrichment failed")
        except Exception as update_exc:
            Log.error(
                f"Could not record enrichment failure for document {context.record.id}: "
                f"{update_exc}"
            )
        return context


class CompleteRecordStep(PipelineStep):
    """Completes the record when enrichment is disabled."""

    name = "complete"
    best_effort = True

    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.record is None:
            raise ValueError("IngestionContext.record must be persisted before completion")
        context.record = self._doc_repo.mark_completed(context.record.id)
        return context


def _require_file(context: IngestionContext) -> FilePayload:
    if context.request.file is None:
        raise ValueError("SubmissionRequest.file must be set")
    return context.request.file
