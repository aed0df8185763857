from unittest.mock import MagicMock

import pytest
from factories import RECORD_ID, make_record
from psycopg import OperationalError

from app.database.repositories.documents_repository import DocumentsRepository
from app.ingestion.deletion import DeletionOrchestrator
from app.ingestion.exceptions import DocumentNotFoundError, PersistenceFailedError
from app.storage.base import BaseObjectStore
from app.storage.exceptions import StorageError


def _make_orchestrator() -> tuple[DeletionOrchestrator, MagicMock, MagicMock]:
    store = MagicMock(spec=BaseObjectStore)
    repo = MagicMock(spec=DocumentsRepository)
    repo.find_by_id.return_value = make_record()
    return DeletionOrchestrator(store, repo), store, repo


class TestDelete:
    def test_deletes_object_then_record(self) -> None:
        orchestrator, store, repo = _make_orchestrator()

        result = orchestrator.delete(RECORD_ID)

        store.delete.assert_called_once_with("drive-1")
        repo.delete.assert_called_once_with(RECORD_ID)
        assert result.record_id == RECORD_ID
        assert result.object_deleted is True

    def test_object_delete_failure_does_not_block_record_delete(self) -> None:
        orchestrator, store, repo = _make_orchestrator()
        store.delete.side_effect = StorageError("drive down")

        result = orchestrator.delete(RECORD_ID)

        repo.delete.assert_called_once_with(RECORD_ID)
        assert result.object_deleted is False

    def test_record_without_object_skips_store(self) -> None:
        orchestrator, store, repo = _make_orchestrator()
        repo.find_by_id.return_value = make_record(object_store_id=None)

        result = orchestrator.delete(RECORD_ID)

        store.delete.assert_not_called()
        repo.delete.assert_called_once_with(RECORD_ID)
        assert result.object_deleted is None

    def test_second_delete_reports_not_found(self) -> None:
        orchestrator, _store, repo = _make_orchestrator()
        repo.find_by_id.side_effect = [
            make_record(),
            DocumentNotFoundError(f"Document {RECORD_ID} not found"),
        ]

        orchestrator.delete(RECORD_ID)
        with pytest.raises(DocumentNotFoundError):
            orchestrator.delete(RECORD_ID)

        repo.delete.assert_called_once_with(RECORD_ID)


class TestDeleteFailures:
    def test_missing_document_touches_nothing(self) -> None:
        orchestrator, store, repo = _make_orchestrator()
        repo.find_by_id.side_effect = DocumentNotFoundError("Document x not found")

        with pytest.raises(DocumentNotFoundError):
            orchestrator.delete("x")

        store.delete.assert_not_called()
        repo.delete.assert_not_called()

    def test_lookup_failure_raises_persistence_error(self) -> None:
        orchestrator, store, repo = _make_orchestrator()
        repo.find_by_id.side_effect = OperationalError("connection refused")

        with pytest.raises(PersistenceFailedError, match="Database lookup failed"):
            orchestrator.delete(RECORD_ID)

        store.delete.assert_not_called()

    def test_record_delete_failure_raises_persistence_error(self) -> None:
        orchestrator, _store, repo = _make_orchestrator()
        repo.delete.side_effect = OperationalError("connection refused")

        with pytest.raises(PersistenceFailedError, match="Database deletion failed"):
            orchestrator.delete(RECORD_ID)

    def test_concurrent_removal_reports_not_found(self) -> None:
        orchestrator, _store, repo = _make_orchestrator()
        repo.delete.side_effect = DocumentNotFoundError(f"Document {RECORD_ID} not found")

        with pytest.raises(DocumentNotFoundError):
            orchestrator.delete(RECORD_ID)
