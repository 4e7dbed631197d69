"""
Opening database connections for a suite run.

Driver modules are imported only when a database of that type is used, so a
suite against PostgreSQL does not need the ODBC driver manager installed.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any

from datacheck.utils.database_types import DatabaseType

from .config import DatabaseConfig

logger = logging.getLogger(__name__)


@dataclass
class NamedConnection:
    """
    Connection provider carrying the name shown in diagnostics.

    Checks resolve the raw connection through the ``connection`` attribute.
    """

    alias: str
    dbname: str
    connection: Any

    def close(self) -> None:
        self.connection.close()


def sqlserver_connection_string(config: DatabaseConfig) -> str:
    """Build an ODBC connection string for SQL Server."""
    server = config.host if not config.port else f"{config.host},{config.port}"
    return (
        f"DRIVER={{{config.driver}}};"
        f"SERVER={server};"
        f"DATABASE={config.database};"
        f"UID={config.user};"
        f"PWD={config.password};"
        f"TrustServerCertificate=yes;"
    )


def open_connection(config: DatabaseConfig) -> Any:
    """
    Open a DB-API connection for a database config

    PostgreSQL and SQL Server connections are opened in autocommit mode, so
    checks never hold a transaction open between queries.

    Args:
        config: Parsed database settings

    Returns:
        Driver connection object

    Raises:
        Driver-specific errors if the connection fails
    """
    if config.type == DatabaseType.POSTGRESQL:
        import psycopg2

        if config.dsn:
            conn = psycopg2.connect(config.dsn)
        else:
            conn = psycopg2.connect(
                host=config.host,
                port=config.port,
                dbname=config.database,
                user=config.user,
                password=config.password,
            )
        # A failed check must not leave the session in an aborted transaction
        conn.set_session(autocommit=True)
        return conn

    if config.type == DatabaseType.SQLSERVER:
        import pyodbc

        conn = pyodbc.connect(config.dsn or sqlserver_connection_string(config))
        conn.autocommit = True
        return conn

    if config.type == DatabaseType.SQLITE:
        return sqlite3.connect(config.path or config.database)

    raise ValueError(f"Unsupported database type: {config.type}")


def connect_all(databases: dict[str, DatabaseConfig]) -> dict[str, NamedConnection]:
    """
    Open every database of a suite

    Closes whatever was already opened if one connection fails.

    Args:
        databases: Database configs keyed by alias

    Returns:
        NamedConnection providers keyed by alias
    """
    connections: dict[str, NamedConnection] = {}

    try:
        for alias, config in databases.items():
            connections[alias] = NamedConnection(
                alias=alias,
                dbname=config.display_name,
                connection=open_connection(config),
            )
            logger.info(f"Connected to {config.type.value} database {config.display_name}")
    except Exception:
        close_all(connections)
        raise

    return connections


def close_all(connections: dict[str, NamedConnection]) -> None:
    """Close every connection, logging rather than raising on failure."""
    for alias, named in connections.items():
        try:
            named.close()
        except Exception as e:
            logger.warning(f"Error closing connection '{alias}': {e}")
