"""Read-only SQL gateway for operators."""

from fastapi import APIRouter, Depends, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api.dependencies import AppServices, get_services
from app.api.schemas import QueryRequest
from app.logging.logger import Log
from app.query.exceptions import QueryExecutionError, QueryRejectedError

query_router = APIRouter()


@query_router.options("/sql-query", tags=["Query"])
def query_preflight() -> Response:
    return Response(status_code=200)


@query_router.post("/sql-query", tags=["Query"])
def run_query(
    body: QueryRequest,
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    if body.query is None:
        return JSONResponse(status_code=400, content={"error": "Query is required"})
    try:
        result = services.query_gateway.run(body.query)
    except QueryRejectedError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except QueryExecutionError as exc:
        return JSONResponse(status_code=400, content={"error": f"SQL Error: {exc}"})
    except Exception as exc:
        Log.exception(f"SQL query error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Query execution failed", "message": str(exc)},
        )
    return JSONResponse(content=jsonable_encoder({
        "data": result.data,
        "rowCount": result.row_count,
        "executionTime": result.execution_time_ms,
    }))
