"""
Database type enumeration for type-safe database identification.
"""

from enum import Enum
from typing import Any


class DatabaseType(str, Enum):
    """
    Enumeration of supported database types.

    Inherits from str so values compare equal to the names used in suite
    files ("postgresql", "sqlserver", "sqlite").
    """

    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    SQLITE = "sqlite"
    UNKNOWN = "unknown"

    @classmethod
    def from_connection(cls, connection: Any) -> "DatabaseType":
        """
        Detect database type from the driver module of a connection.

        Args:
            connection: DB-API connection object

        Returns:
            DatabaseType enum value
        """
        module = type(connection).__module__.lower()

        if "psycopg" in module:
            return cls.POSTGRESQL
        elif "pyodbc" in module:
            return cls.SQLSERVER
        elif "sqlite3" in module:
            return cls.SQLITE
        else:
            return cls.UNKNOWN

    def quote_identifier(self, identifier: str) -> str:
        """
        Quote identifier based on database type.

        Args:
            identifier: Column or table name (no schema part)

        Returns:
            Quoted identifier string
        """
        if self in (DatabaseType.POSTGRESQL, DatabaseType.SQLITE):
            return f'"{identifier}"'
        elif self == DatabaseType.SQLSERVER:
            return f"[{identifier}]"
        else:
            return identifier
