import uuid
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import DOCUMENT_COLUMNS, DocumentFilters, DocumentRecord, NewDocument
from app.enrichment.models import DocumentAnalysis
from app.ingestion.exceptions import DocumentNotFoundError

_COLUMNS = ", ".join(DOCUMENT_COLUMNS)


class DocumentsRepository:
    """Database operations for the documents table.

    Every status-changing update is guarded by ``status = 'pending'`` so a
    document's status only ever moves forward. object_store_id is written
    once, on insert.
    """

    def insert(self, document: NewDocument) -> DocumentRecord:
        """Insert a pending document row and return it as committed."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (title, description, document_type, priority, tags, status,
                     file_url, file_name, file_size, file_type,
                     object_store_id, object_store_url, created_by)
                    VALUES (%s, %s, %s, %s, %s, 'pending', %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document.title,
                        document.description,
                        document.document_type,
                        document.priority,
                        list(document.tags),
                        document.file_url,
                        document.file_name,
                        document.file_size,
                        document.file_type,
                        document.object_store_id,
                        document.object_store_url,
                        document.created_by,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return DocumentRecord.from_row(row)

    def find_by_id(self, record_id: str) -> DocumentRecord:
        """Find a live document by ID.

        Raises:
            DocumentNotFoundError: if no live document with this ID exists.
        """
        document_uuid = _parse_id(record_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE id = %s AND deleted_at IS NULL
                    """,
                    (document_uuid,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {record_id} not found")
        return DocumentRecord.from_row(row)

    def update_enrichment(
        self,
        record_id: str,
        extracted_text: str,
        analysis: DocumentAnalysis,
    ) -> DocumentRecord:
        """Write the full enrichment field set and complete the document in one update.

        User-submitted fields are left untouched; the model's category and
        priority are stored as suggestions.

        Raises:
            DocumentNotFoundError: if no pending document with this ID exists.
        """
        return self._complete_pending(
            record_id,
            """
            ai_extracted_text = %s,
            ai_summary = %s,
            ai_keywords = %s,
            ai_category = %s,
            ai_priority_suggestion = %s,
            ai_suggested_tags = %s,
            ai_action_items = %s,
            processing_status = 'completed',
            processing_error = NULL,
            """,
            (
                extracted_text,
                analysis.summary,
                list(analysis.keywords),
                analysis.category,
                analysis.priority,
                list(analysis.tags),
                list(analysis.action_items),
            ),
        )

    def mark_enrichment_failed(self, record_id: str, error: str) -> DocumentRecord:
        """Complete the document with enrichment recorded as failed.

        Raises:
            DocumentNotFoundError: if no pending document with this ID exists.
        """
        return self._complete_pending(
            record_id,
            """
            processing_status = 'failed',
            processing_error = %s,
            """,
            (error,),
        )

    def mark_completed(self, record_id: str) -> DocumentRecord:
        """Complete the document without enrichment.

        Raises:
            DocumentNotFoundError: if no pending document with this ID exists.
        """
        return self._complete_pending(record_id, "", ())

    def delete(self, record_id: str) -> None:
        """Hard-delete a document row.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        document_uuid = _parse_id(record_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_uuid,))
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {record_id} not found")
            conn.commit()

    def soft_delete(self, record_id: str) -> None:
        """Hide a document from fetch and list without removing the row.

        Raises:
            DocumentNotFoundError: if no live document with this ID exists.
        """
        document_uuid = _parse_id(record_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET deleted_at = NOW(), updated_at = NOW()
                    WHERE id = %s AND deleted_at IS NULL
                    """,
                    (document_uuid,),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {record_id} not found")
            conn.commit()

    def list_documents(self, filters: DocumentFilters) -> tuple[list[DocumentRecord], int]:
        """Return one page of live documents and the total number of matches.

        Raises:
            ValueError: if sort_by is not a documents column or sort_order is
                not asc/desc.
        """
        if filters.sort_by not in DOCUMENT_COLUMNS:
            raise ValueError(f"Cannot sort by '{filters.sort_by}'")
        sort_order = filters.sort_order.lower()
        if sort_order not in ("asc", "desc"):
            raise ValueError("sort_order must be 'asc' or 'desc'")

        where, params = _build_where(filters)
        limit = filters.page_limit
        offset = filters.page_offset
        page_query = sql.SQL(
            "SELECT {columns} FROM documents WHERE {where} "
            "ORDER BY {sort_by} {sort_order} LIMIT %s OFFSET %s"
        ).format(
            columns=sql.SQL(_COLUMNS),
            where=where,
            sort_by=sql.Identifier(filters.sort_by),
            sort_order=sql.SQL(sort_order.upper()),
        )
        count_query = sql.SQL("SELECT COUNT(*) FROM documents WHERE {where}").format(where=where)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(page_query, (*params, limit, offset))
                rows = cur.fetchall()
            with conn.cursor() as cur:
                cur.execute(count_query, params)
                count_row = cur.fetchone()

        total = int(count_row[0]) if count_row is not None else 0
        return [DocumentRecord.from_row(row) for row in rows], total

    def _complete_pending(
        self,
        record_id: str,
        assignments: str,
        params: tuple[Any, ...],
    ) -> DocumentRecord:
        document_uuid = _parse_id(record_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE documents
                    SET {assignments}
                        status = 'completed',
                        updated_at = NOW()
                    WHERE id = %s AND status = 'pending' AND deleted_at IS NULL
                    RETURNING {_COLUMNS}
                    """,
                    (*params, document_uuid),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise DocumentNotFoundError(f"Pending document {record_id} not found")
        return DocumentRecord.from_row(row)


def _parse_id(record_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(record_id))
    except ValueError as exc:
        raise DocumentNotFoundError(f"Document {record_id} not found") from exc


def _build_where(filters: DocumentFilters) -> tuple[sql.Composed, tuple[Any, ...]]:
    clauses = [sql.SQL("deleted_at IS NULL")]
    params: list[Any] = []
    for column in ("document_type", "priority", "status", "created_by"):
        value = getattr(filters, column)
        if value:
            clauses.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
            params.append(value)
    if filters.search:
        clauses.append(sql.SQL(
            "(title ILIKE %s OR description ILIKE %s OR ai_extracted_text ILIKE %s)"
        ))
        pattern = f"%{_escape_like(filters.search)}%"
        params.extend([pattern, pattern, pattern])
    return sql.SQL(" AND ").join(clauses), tuple(params)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
