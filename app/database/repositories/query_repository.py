from typing import Any

import psycopg
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.query.exceptions import QueryExecutionError


class QueryRepository:
    """Executes operator queries in a read-only transaction with a statement timeout."""

    def __init__(self, statement_timeout_ms: int, max_rows: int) -> None:
        self._statement_timeout_ms = statement_timeout_ms
        self._max_rows = max_rows

    def fetch_read_only(self, query: str) -> list[dict[str, Any]]:
        """Run query and return at most max_rows rows.

        Raises:
            QueryExecutionError: if the database rejects the query.
        """
        with get_connection() as conn:
            try:
                with conn.transaction():
                    conn.execute("SET TRANSACTION READ ONLY")
                    conn.execute(
                        "SELECT set_config('statement_timeout', %s, true)",
                        (str(self._statement_timeout_ms),),
                    )
                    with conn.cursor(row_factory=dict_row) as cur:
                        # Extended protocol: the server rejects more than one statement.
                        cur.execute(query.encode(), prepare=True)
                        if cur.description is None:
                            return []
                        return cur.fetchmany(self._max_rows)
            except psycopg.Error as exc:
                raise QueryExecutionError(str(exc).strip() or type(exc).__name__) from exc
