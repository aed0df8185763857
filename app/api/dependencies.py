from dataclasses import dataclass

from fastapi import Request

from app.config.settings import Settings
from app.database.repositories.documents_repository import DocumentsRepository
from app.database.repositories.query_repository import QueryRepository
from app.enrichment.factory import EnricherFactory
from app.ingestion.deletion import DeletionOrchestrator
from app.ingestion.orchestrator import IngestionOrchestrator, build_ingestion_orchestrator
from app.query.gateway import QueryGateway
from app.storage.base import BaseObjectStore
from app.storage.factory import ObjectStoreFactory


@dataclass
class AppServices:
    """Collaborators shared by the HTTP handlers, wired once at startup."""

    ingestion: IngestionOrchestrator
    deletion: DeletionOrchestrator
    documents: DocumentsRepository
    query_gateway: QueryGateway
    object_store: BaseObjectStore


def build_services(settings: Settings) -> AppServices:
    object_store = ObjectStoreFactory.create(settings)
    doc_repo = DocumentsRepository()
    return AppServices(
        ingestion=build_ingestion_orchestrator(
            settings,
            object_store=object_store,
            doc_repo=doc_repo,
            enricher=EnricherFactory.create(settings),
        ),
        deletion=DeletionOrchestrator(object_store, doc_repo),
        documents=doc_repo,
        query_gateway=QueryGateway(
            QueryRepository(
                statement_timeout_ms=settings.query_statement_timeout_ms,
                max_rows=settings.query_max_rows,
            )
        ),
        object_store=object_store,
    )


def get_services(request: Request) -> AppServices:
    return request.app.state.services
