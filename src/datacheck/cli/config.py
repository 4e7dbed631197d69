"""
Suite file loading.

A suite is a YAML document naming the databases to connect to and the
checks to run against them:

    name: core
    databases:
      new:
        type: postgresql
        host: db-new.internal
        database: core_111
        user: qc
        password_env: CORE_NEW_PASSWORD
      old:
        type: postgresql
        database: core_110
    checks:
      - type: fk
        database: new
        table1: gene
        col1: canonical_transcript_id
        table2: transcript
        col2: transcript_id
      - type: row_subtotals
        primary: new
        secondary: old
        sql: SELECT biotype, COUNT(*) FROM gene GROUP BY biotype
        tolerance: 0.95

Connection fields missing from the file are read from
``DATACHECK_<ALIAS>_{HOST,PORT,DATABASE,USER,PASSWORD}``. Everything that can
be validated without a database is validated here, so a bad suite fails
before any check runs.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from datacheck.assertions.comparative import validate_tolerance
from datacheck.assertions.comparators import Comparator
from datacheck.exceptions import ConfigurationError
from datacheck.query import ForeignKey, OrphanQueryBuilder, validate_subtotal_query
from datacheck.utils.database_types import DatabaseType

logger = logging.getLogger(__name__)

# check type -> (required arguments, optional arguments)
CHECK_SIGNATURES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "is_rows": (("database", "sql", "expected"), ("name", "scalar")),
    "cmp_rows": (("database", "sql", "operator", "expected"), ("name", "scalar")),
    "is_rows_zero": (("database", "sql"), ("name", "diag_prefix", "scalar")),
    "is_rows_nonzero": (("database", "sql"), ("name", "scalar")),
    "row_totals": (("primary", "secondary", "sql"), ("tolerance", "name", "scalar")),
    "row_subtotals": (("primary", "secondary", "sql"), ("tolerance", "name")),
    "fk": (
        ("database", "table1", "col1", "table2"),
        ("col2", "both_ways", "constraint", "name"),
    ),
}

# Arguments naming a database alias rather than carrying a value
CONNECTION_ARGUMENTS = {"database": "connection", "primary": "primary", "secondary": "secondary"}

DEFAULT_PORTS = {DatabaseType.POSTGRESQL: 5432, DatabaseType.SQLSERVER: 1433}

# Arguments that must be YAML booleans; "false" as a string is truthy
BOOLEAN_ARGUMENTS = ("scalar", "both_ways")

# Arguments that must be SQL text or labels
TEXT_ARGUMENTS = ("sql", "name", "diag_prefix", "constraint")


@dataclass
class DatabaseConfig:
    """Connection settings for one database alias."""

    alias: str
    type: DatabaseType
    host: str | None = None
    port: int | None = None
    database: str | None = None
    user: str | None = None
    password: str | None = None
    dsn: str | None = None
    path: str | None = None
    driver: str = "ODBC Driver 18 for SQL Server"

    @property
    def display_name(self) -> str:
        """Name used in diagnostics, e.g. "core_111 (new)"."""
        label = self.database or self.path or self.alias
        return label if label == self.alias else f"{label} ({self.alias})"


@dataclass
class CheckConfig:
    """One check from a suite file."""

    type: str
    arguments: dict[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return str(self.arguments.get("name") or self.type)

    def database_aliases(self) -> list[str]:
        return [self.arguments[key] for key in CONNECTION_ARGUMENTS if key in self.arguments]

    def call_arguments(self, connections: dict[str, Any]) -> dict[str, Any]:
        """
        Keyword arguments for the matching DataCheck method

        Args:
            connections: Open connections (or providers) keyed by alias
        """
        kwargs = {}
        for key, value in self.arguments.items():
            if key in CONNECTION_ARGUMENTS:
                kwargs[CONNECTION_ARGUMENTS[key]] = connections[value]
            else:
                kwargs[key] = value
        return kwargs


@dataclass
class SuiteConfig:
    """A parsed suite file."""

    name: str
    databases: dict[str, DatabaseConfig]
    checks: list[CheckConfig]


def _env(alias: str, key: str) -> str | None:
    return os.getenv(f"DATACHECK_{alias.upper()}_{key}")


def parse_database(alias: str, raw: Any) -> DatabaseConfig:
    """
    Build a DatabaseConfig from a suite entry plus environment defaults

    Args:
        alias: Name the checks use to refer to this database
        raw: Mapping from the suite file

    Raises:
        ConfigurationError: On an unknown type or malformed entry
    """
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Database '{alias}' must be a mapping")

    try:
        db_type = DatabaseType(str(raw.get("type", "postgresql")).lower())
    except ValueError:
        raise ConfigurationError(f"Database '{alias}' has unknown type {raw.get('type')!r}") from None
    if db_type == DatabaseType.UNKNOWN:
        raise ConfigurationError(f"Database '{alias}' must declare a concrete type")

    password = raw.get("password")
    if password is None and raw.get("password_env"):
        password = os.getenv(raw["password_env"])
    if password is None:
        password = _env(alias, "PASSWORD")

    port = raw.get("port") or _env(alias, "PORT") or DEFAULT_PORTS.get(db_type)

    try:
        port = int(port) if port is not None else None
    except (TypeError, ValueError):
        raise ConfigurationError(f"Database '{alias}' has invalid port {port!r}") from None

    config = DatabaseConfig(
        alias=alias,
        type=db_type,
        host=raw.get("host") or _env(alias, "HOST") or "localhost",
        port=port,
        database=raw.get("database") or _env(alias, "DATABASE"),
        user=raw.get("user") or _env(alias, "USER"),
        password=password,
        dsn=raw.get("dsn"),
        path=raw.get("path"),
        driver=raw.get("driver", DatabaseConfig.driver),
    )

    if db_type == DatabaseType.SQLITE and not (config.path or config.database):
        raise ConfigurationError(f"SQLite database '{alias}' needs a path")

    return config


def parse_check(index: int, raw: Any, databases: dict[str, DatabaseConfig]) -> CheckConfig:
    """
    Validate one check entry

    Args:
        index: 1-based position, for error messages
        raw: Mapping from the suite file
        databases: Declared databases

    Raises:
        ConfigurationError: On any problem detectable without a database
    """
    if not isinstance(raw, dict) or "type" not in raw:
        raise ConfigurationError(f"Check #{index} must be a mapping with a 'type'")

    arguments = dict(raw)
    check_type = arguments.pop("type")

    if check_type not in CHECK_SIGNATURES:
        allowed = ", ".join(sorted(CHECK_SIGNATURES))
        raise ConfigurationError(
            f"Check #{index} has unknown type {check_type!r}; expected one of: {allowed}"
        )

    required, optional = CHECK_SIGNATURES[check_type]

    # A single declared database is the default target
    if "database" in required and "database" not in arguments and len(databases) == 1:
        arguments["database"] = next(iter(databases))

    missing = [key for key in required if key not in arguments]
    if missing:
        raise ConfigurationError(
            f"Check #{index} ({check_type}) is missing: {', '.join(missing)}"
        )

    unknown = sorted(set(arguments) - set(required) - set(optional))
    if unknown:
        raise ConfigurationError(
            f"Check #{index} ({check_type}) has unknown fields: {', '.join(unknown)}"
        )

    check = CheckConfig(type=check_type, arguments=arguments)

    for alias in check.database_aliases():
        if alias not in databases:
            raise ConfigurationError(
                f"Check #{index} ({check_type}) refers to undeclared database {alias!r}"
            )

    prefix = f"Check #{index} ({check_type})"

    for key in TEXT_ARGUMENTS:
        value = arguments.get(key)
        if key in arguments and not isinstance(value, str) and not (value is None and key != "sql"):
            raise ConfigurationError(f"{prefix}: '{key}' must be a string, got {value!r}")

    for key in BOOLEAN_ARGUMENTS:
        if key in arguments and not isinstance(arguments[key], bool):
            raise ConfigurationError(
                f"{prefix}: '{key}' must be true or false, got {arguments[key]!r}"
            )

    # bool is an int subclass, but "expected: true" is never a row count
    if "expected" in arguments:
        expected = arguments["expected"]
        if isinstance(expected, bool) or not isinstance(expected, int):
            raise ConfigurationError(f"{prefix}: 'expected' must be an integer, got {expected!r}")

    if "operator" in arguments:
        arguments["operator"] = Comparator.parse(arguments["operator"])
    if "tolerance" in arguments:
        arguments["tolerance"] = validate_tolerance(arguments["tolerance"])
    if check_type == "row_subtotals":
        validate_subtotal_query(arguments["sql"])
    if check_type == "fk":
        key = ForeignKey(
            arguments["table1"],
            arguments["col1"],
            arguments["table2"],
            arguments.get("col2") or arguments["col1"],
        )
        # Builds both directions; raises on any invalid table or column name
        OrphanQueryBuilder().orphan_count_sql(key)
        OrphanQueryBuilder().orphan_count_sql(key.reversed())

    return check


def parse_suite(data: Any, default_name: str = "datacheck") -> SuiteConfig:
    """
    Build a SuiteConfig from already-parsed YAML

    Raises:
        ConfigurationError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Suite file must contain a mapping")

    raw_databases = data.get("databases") or {}
    if not isinstance(raw_databases, dict) or not raw_databases:
        raise ConfigurationError("Suite file must declare at least one database")

    raw_checks = data.get("checks") or []
    if not isinstance(raw_checks, list):
        raise ConfigurationError("'checks' must be a list")

    databases = {
        alias: parse_database(alias, raw) for alias, raw in raw_databases.items()
    }
    checks = [
        parse_check(index, raw, databases) for index, raw in enumerate(raw_checks, start=1)
    ]

    return SuiteConfig(name=str(data.get("name") or default_name), databases=databases, checks=checks)


def load_suite(path: str | Path) -> SuiteConfig:
    """
    Read and validate a suite file

    Args:
        path: YAML file path

    Returns:
        SuiteConfig

    Raises:
        ConfigurationError: If the file is missing, not YAML, or malformed
    """
    path = Path(path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Suite file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Suite file {path} is not valid YAML: {e}") from e

    suite = parse_suite(data, default_name=path.stem)
    logger.info(
        f"Loaded suite '{suite.name}': {len(suite.checks)} check(s) "
        f"against {len(suite.databases)} database(s)"
    )
    return suite
