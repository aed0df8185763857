import pytest

from app.query.validator import validate_query


class TestAcceptedQueries:
    @pytest.mark.parametrize(
        "query",
        [
            "SELECT * FROM documents",
            "  select id, title from documents where priority = 'high'  ",
            "WITH recent AS (SELECT * FROM documents) SELECT COUNT(*) FROM recent",
            "SELECT\n  status,\n  COUNT(*)\nFROM documents\nGROUP BY status",
        ],
    )
    def test_accepts_reads(self, query: str) -> None:
        result = validate_query(query)
        assert result.is_valid
        assert result.error is None


class TestRejectedQueries:
    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_rejects_empty(self, query: str) -> None:
        result = validate_query(query)
        assert not result.is_valid
        assert result.error == "Query cannot be empty"

    @pytest.mark.parametrize(
        "query",
        [
            "DELETE FROM documents",
            "delete   from documents",
            "DeLeTe\nFROM documents",
            "UPDATE documents SET title = 'x'",
            "update documents\tset title = 'x'",
            "INSERT INTO documents (title) VALUES ('x')",
            "DROP TABLE documents",
            "ALTER TABLE documents ADD COLUMN x int",
            "CREATE TABLE t (id int)",
            "TRUNCATE documents",
            "GRANT ALL ON documents TO public",
            "REVOKE ALL ON documents FROM public",
        ],
    )
    def test_rejects_mutations(self, query: str) -> None:
        result = validate_query(query)
        assert not result.is_valid
        assert "dangerous operations" in (result.error or "")

    def test_rejects_mutation_hidden_after_select(self) -> None:
        result = validate_query("SELECT 1; DELETE FROM documents")
        assert not result.is_valid

    @pytest.mark.parametrize(
        "query",
        [
            "SELECT 1; COMMIT; DROP SCHEMA public CASCADE",
            "SELECT 1;SELECT 2",
            "WITH x AS (SELECT 1) SELECT * FROM x; COMMIT",
        ],
    )
    def test_rejects_multiple_statements(self, query: str) -> None:
        result = validate_query(query)
        assert not result.is_valid
        assert result.error == "Only a single statement is allowed."

    @pytest.mark.parametrize("query", ["SELECT 1;", "SELECT 1 ;  ", "SELECT 1;;"])
    def test_accepts_trailing_semicolon(self, query: str) -> None:
        assert validate_query(query).is_valid

    @pytest.mark.parametrize("query", ["SHOW tables", "EXPLAIN SELECT 1", "VACUUM"])
    def test_rejects_other_commands(self, query: str) -> None:
        result = validate_query(query)
        assert not result.is_valid
        first_word = query.split()[0].upper()
        assert result.error == (
            f"Command '{first_word}' is not allowed. "
            "Only SELECT and WITH statements are permitted."
        )
