"""
SQL safety utilities for identifier handling.

Table and column names cannot be bound as query parameters, so queries that
need them splice the text in directly. Everything spliced goes through this
module first.
"""

import re

from datacheck.exceptions import ConfigurationError
from datacheck.utils.database_types import DatabaseType


# Strict ASCII-only patterns for SQL identifiers
VALID_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
VALID_SCHEMA_TABLE = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$"
)


def validate_identifier(identifier: str) -> None:
    """
    Validate a SQL identifier (column name, unqualified table name).

    Args:
        identifier: The identifier to validate

    Raises:
        ConfigurationError: If the identifier contains invalid characters
    """
    if not identifier:
        raise ConfigurationError("SQL identifier cannot be empty")

    if not isinstance(identifier, str) or not VALID_IDENTIFIER.fullmatch(identifier):
        raise ConfigurationError(
            f"Invalid SQL identifier: {identifier!r}. "
            "Only ASCII letters, digits, and underscores are allowed, "
            "and must start with a letter or underscore."
        )


def validate_schema_table(schema_table: str) -> None:
    """
    Validate a table identifier, optionally schema-qualified.

    Args:
        schema_table: The schema.table (or plain table) identifier to validate

    Raises:
        ConfigurationError: If the identifier format is invalid
    """
    if not schema_table:
        raise ConfigurationError("Table identifier cannot be empty")

    if not isinstance(schema_table, str) or not VALID_SCHEMA_TABLE.fullmatch(schema_table):
        raise ConfigurationError(
            f"Invalid table identifier: {schema_table!r}. "
            "Only ASCII letters, digits, and underscores are allowed."
        )


def quote_identifier(identifier: str, db_type: DatabaseType) -> str:
    """
    Validate and quote a column identifier for the given database type.

    Args:
        identifier: Column name
        db_type: Target database type; UNKNOWN leaves the name unquoted

    Returns:
        Identifier safe for splicing into SQL
    """
    validate_identifier(identifier)
    return db_type.quote_identifier(identifier)


def quote_schema_table(schema_table: str, db_type: DatabaseType) -> str:
    """
    Validate and quote a table identifier, quoting schema and table separately.

    Args:
        schema_table: e.g. "public.gene" or just "gene"
        db_type: Target database type; UNKNOWN leaves the name unquoted

    Returns:
        Identifier safe for splicing into SQL
    """
    validate_schema_table(schema_table)
    return ".".join(db_type.quote_identifier(part) for part in schema_table.split("."))
