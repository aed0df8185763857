"""Coarse read-only filter for free-text SQL.

Independent gates, all mandatory:

- no mutating-statement pattern anywhere in the text;
- one statement only (a trailing semicolon is fine);
- the first token is an allowed read command.

This is not a parser; it is meant for a trusted internal tool. The gateway
additionally runs queries in a read-only transaction.
"""

import re
from dataclasses import dataclass

ALLOWED_COMMANDS = ("SELECT", "WITH")

DANGEROUS_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"DELETE\s+FROM",
        r"UPDATE\s+\w+\s+SET",
        r"INSERT\s+INTO",
        r"DROP\s+TABLE",
        r"ALTER\s+TABLE",
        r"CREATE\s+TABLE",
        r"TRUNCATE",
        r"GRANT",
        r"REVOKE",
    )
)


@dataclass(frozen=True)
class QueryValidation:
    is_valid: bool
    error: str | None = None


def validate_query(query: str) -> QueryValidation:
    trimmed = query.strip()
    if not trimmed:
        return QueryValidation(False, "Query cannot be empty")

    for pattern in DANGEROUS_PATTERNS:
        if pattern.search(trimmed):
            return QueryValidation(
                False,
                "Query contains dangerous operations. Only SELECT statements are allowed.",
            )

    if ";" in trimmed.rstrip(";").rstrip():
        return QueryValidation(False, "Only a single statement is allowed.")

    first_word = trimmed.split(maxsplit=1)[0].upper()
    if first_word not in ALLOWED_COMMANDS:
        return QueryValidation(
            False,
            f"Command '{first_word}' is not allowed. "
            "Only SELECT and WITH statements are permitted.",
        )
    return QueryValidation(True)
