"""Document routes: upload (ingest), delete, and read."""

from fastapi import APIRouter, Depends, Header, Query, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api.dependencies import AppServices, get_services
from app.api.schemas import DocumentUploadRequest
from app.database.models import DocumentFilters
from app.ingestion.exceptions import DocumentNotFoundError, InvalidInputError
from app.logging.logger import Log

documents_router = APIRouter()


@documents_router.options("/documents", tags=["Documents"])
def documents_preflight() -> Response:
    return Response(status_code=200)


@documents_router.post("/documents", tags=["Documents"])
def upload_document(
    body: DocumentUploadRequest,
    services: AppServices = Depends(get_services),
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Ingest an uploaded file.

    Returns 200 with the document even when enrichment failed; the failure is
    recorded on the document itself.
    """
    try:
        submission = body.to_submission(created_by=x_user_id)
        record = services.ingestion.ingest(submission)
    except InvalidInputError as exc:
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": exc.errors},
        )
    except Exception as exc:
        Log.exception(f"Error in document upload: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )
    return JSONResponse(
        content=jsonable_encoder({"success": True, "document": record.to_dict()})
    )


@documents_router.delete("/documents", tags=["Documents"])
def delete_document(
    record_id: str | None = Query(default=None, alias="id"),
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    if not record_id:
        return JSONResponse(status_code=400, content={"error": "Document ID is required"})
    try:
        result = services.deletion.delete(record_id)
    except DocumentNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Document not found"})
    except Exception as exc:
        Log.exception(f"Delete document error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to delete document", "message": str(exc)},
        )

    drive_delete_result = None
    if result.object_deleted:
        drive_delete_result = {"success": True, "message": "File deleted successfully"}
    return JSONResponse(content={
        "success": True,
        "message": "Document deleted successfully",
        "driveDeleteResult": drive_delete_result,
    })


@documents_router.get("/documents", tags=["Documents"])
def read_documents(
    record_id: str | None = Query(default=None, alias="id"),
    search: str | None = None,
    document_type: str | None = None,
    priority: str | None = None,
    status: str | None = None,
    created_by: str | None = None,
    limit: int = 20,
    offset: int = 0,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    """Fetch one document by id, or list documents with filters and pagination."""
    if record_id:
        try:
            record = services.documents.find_by_id(record_id)
        except DocumentNotFoundError:
            return JSONResponse(status_code=404, content={"error": "Document not found"})
        except Exception as exc:
            Log.exception(f"Read document error: {exc}")
            return JSONResponse(
                status_code=500,
                content={"error": "Failed to read document", "message": str(exc)},
            )
        return JSONResponse(content=jsonable_encoder({"document": record.to_dict()}))

    filters = DocumentFilters(
        document_type=document_type,
        priority=priority,
        status=status,
        created_by=created_by,
        search=search,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    try:
        records, total = services.documents.list_documents(filters)
    except ValueError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception as exc:
        Log.exception(f"Read documents error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to read documents", "message": str(exc)},
        )
    return JSONResponse(content=jsonable_encoder({
        "documents": [record.to_dict() for record in records],
        "pagination": {
            "total": total,
            "limit": filters.page_limit,
            "offset": filters.page_offset,
            "hasMore": filters.page_offset + len(records) < total,
        },
    }))
