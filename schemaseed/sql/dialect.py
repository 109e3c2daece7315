"""SQLGlot helpers for checking and translating compiled DDL."""

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError

from schemaseed.validation import SchemaError

SOURCE_DIALECT = "mysql"


def parse_statement(statement: str, dialect: str = SOURCE_DIALECT) -> exp.Expression:
    """Parse a single compiled statement.

    Raises:
        SchemaError: If the statement does not parse
    """
    try:
        parsed = sqlglot.parse_one(statement.strip().rstrip(";"), read=dialect)
    except ParseError as e:
        raise SchemaError(f"Statement does not parse as {dialect}: {statement!r}\n{e}") from e

    if parsed is None:
        raise SchemaError(f"Empty statement: {statement!r}")
    return parsed


def parse_statements(statements: list[str], dialect: str = SOURCE_DIALECT) -> list[exp.Expression]:
    """Parse every compiled statement, failing on the first that does not parse."""
    return [parse_statement(statement, dialect) for statement in statements]


def transpile_statements(statements: list[str], dialect: str, pretty: bool = True) -> list[str]:
    """Translate compiled MySQL statements to another SQLGlot dialect.

    Args:
        statements: Statements produced by the schema compiler
        dialect: Target dialect (e.g. "postgres", "sqlite", "duckdb")
        pretty: Pretty-print multi-line statements

    Returns:
        One translated statement per input statement, each ending in ``;``
    """
    if dialect == SOURCE_DIALECT:
        return list(statements)

    translated = []
    for statement in statements:
        parsed = parse_statement(statement)
        translated.append(parsed.sql(dialect=dialect, pretty=pretty) + ";")
    return translated
