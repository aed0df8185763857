import time
from dataclasses import dataclass
from typing import Any

from app.database.repositories.query_repository import QueryRepository
from app.logging.logger import Log
from app.query.exceptions import QueryRejectedError
from app.query.validator import validate_query


@dataclass(frozen=True)
class QueryResult:
    data: list[dict[str, Any]]
    row_count: int
    execution_time_ms: int


class QueryGateway:
    """Validates a free-text query and executes it only if it is a safe read."""

    def __init__(self, query_repo: QueryRepository) -> None:
        self._query_repo = query_repo

    def run(self, query: str) -> QueryResult:
        """Raises:
            QueryRejectedError: the query failed validation and was not executed.
            QueryExecutionError: the database rejected the query.
        """
        validation = validate_query(query)
        if not validation.is_valid:
            Log.warning(f"Rejected query: {validation.error}")
            raise QueryRejectedError(validation.error or "Query rejected")

        started = time.monotonic()
        rows = self._query_repo.fetch_read_only(query)
        elapsed_ms = int((time.monotonic() - started) * 1000)
        Log.info(f"Query returned {len(rows)} rows in {elapsed_ms} ms")
        return QueryResult(data=rows, row_count=len(rows), execution_time_ms=elapsed_ms)
