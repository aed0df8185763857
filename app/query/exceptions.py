class QueryError(Exception):
    """Base exception for the read-only query gateway."""


class QueryRejectedError(QueryError):
    """Raised when a query fails the read-only checks. It was never executed."""


class QueryExecutionError(QueryError):
    """Raised when the database rejects an accepted query."""
