from app.database.repositories.documents_repository import DocumentsRepository
from app.ingestion.exceptions import DocumentNotFoundError, PersistenceFailedError
from app.ingestion.models import DeleteResult
from app.logging.logger import Log
from app.storage.base import BaseObjectStore


class DeletionOrchestrator:
    """Removes a document: fetch -> delete stored object (best-effort) -> delete record."""

    def __init__(self, object_store: BaseObjectStore, doc_repo: DocumentsRepository) -> None:
        self._object_store = object_store
        self._doc_repo = doc_repo

    def delete(self, record_id: str) -> DeleteResult:
        """Delete a document and its stored object.

        A failed object deletion is logged and reported in the result; it
        never blocks removal of the record.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceFailedError: if the record store cannot fetch or delete it.
        """
        try:
            record = self._doc_repo.find_by_id(record_id)
        except DocumentNotFoundError:
            raise
        except Exception as exc:
            raise PersistenceFailedError(f"Database lookup failed: {exc}") from exc

        object_deleted: bool | None = None
        if record.object_store_id:
            object_deleted = self._delete_object(record.object_store_id)

        try:
            self._doc_repo.delete(record.id)
        except DocumentNotFoundError:
            raise
        except Exception as exc:
            raise PersistenceFailedError(f"Database deletion failed: {exc}") from exc

        Log.info(f"Deleted document {record.id} (object deleted: {object_deleted})")
        return DeleteResult(record_id=record.id, object_deleted=object_deleted)

    def _delete_object(self, object_id: str) -> bool:
        try:
            self._object_store.delete(object_id)
        except Exception as exc:
            Log.warning(f"Failed to delete object {object_id}, continuing: {exc}")
            return False
        return True
