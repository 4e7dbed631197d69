"""
Connection handle resolution.

Checks accept either a DB-API connection or a provider object that wraps one
(anything exposing a ``connection`` attribute or zero-argument method). The
core borrows the connection for a single query and never closes it.
"""

from typing import Any, Protocol, runtime_checkable

UNKNOWN_DATABASE = "unknown database"


@runtime_checkable
class DBAPIConnection(Protocol):
    """The part of a PEP 249 connection the executor relies on."""

    def cursor(self) -> Any: ...


def resolve_connection(handle: Any) -> Any:
    """
    Return the raw DB-API connection behind a handle.

    Args:
        handle: DB-API connection, or provider exposing ``connection``

    Returns:
        Object with a ``cursor()`` method

    Raises:
        TypeError: If no connection can be found on the handle
    """
    if isinstance(handle, DBAPIConnection):
        return handle

    accessor = getattr(handle, "connection", None)
    if callable(accessor) and not isinstance(accessor, DBAPIConnection):
        accessor = accessor()

    if isinstance(accessor, DBAPIConnection):
        return accessor

    raise TypeError(
        f"Expected a DB-API connection or an object exposing one via "
        f"'connection', got {type(handle).__name__}"
    )


def _name_of(obj: Any) -> str | None:
    for attr in ("dbname", "database", "name"):
        value = getattr(obj, attr, None)
        if isinstance(value, str) and value:
            return value

    # psycopg2 / psycopg 3 expose the name on connection.info
    info_name = getattr(getattr(obj, "info", None), "dbname", None)
    if isinstance(info_name, str) and info_name:
        return info_name

    return None


def get_database_name(handle: Any) -> str:
    """
    Best-effort human-readable database name for diagnostics.

    Looks at the provider first, then at the raw connection.

    Args:
        handle: DB-API connection or provider

    Returns:
        Database name, or "unknown database"
    """
    name = _name_of(handle)
    if name:
        return name

    try:
        connection = resolve_connection(handle)
    except TypeError:
        return UNKNOWN_DATABASE

    return _name_of(connection) or UNKNOWN_DATABASE
