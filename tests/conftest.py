"""
Pytest configuration and fixtures for datacheck tests.
Provides fake DB-API connections, an in-memory SQLite schema and a collector.
"""

import sqlite3
from unittest.mock import MagicMock

import pytest

from datacheck.report import ResultCollector


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def make_connection(scalar=None, rows=None, error=None):
    """
    Build a mock DB-API connection.

    Args:
        scalar: Value returned by fetchone()[0] for scalar queries
        rows: Rows returned by fetchall() for row-fetching queries
        error: Exception raised by cursor.execute
    """
    connection = MagicMock(name="connection")
    cursor = connection.cursor.return_value

    if error is not None:
        cursor.execute.side_effect = error

    cursor.fetchone.return_value = None if scalar is None else (scalar,)
    cursor.fetchall.return_value = list(rows or [])
    return connection


@pytest.fixture
def collector() -> ResultCollector:
    """Fresh in-memory reporter."""
    return ResultCollector()


@pytest.fixture
def fake_connection():
    """Factory for mock connections."""
    return make_connection


def build_genome_db(genes, transcripts, path=":memory:") -> sqlite3.Connection:
    """
    Create a database with gene and transcript tables.

    Args:
        genes: (gene_id, biotype, canonical_transcript_id) tuples
        transcripts: (transcript_id, gene_id) tuples
        path: SQLite file, in memory by default
    """
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE gene (
            gene_id INTEGER PRIMARY KEY,
            biotype TEXT,
            canonical_transcript_id INTEGER
        );
        CREATE TABLE transcript (
            transcript_id INTEGER PRIMARY KEY,
            gene_id INTEGER
        );
        """
    )
    conn.executemany("INSERT INTO gene VALUES (?, ?, ?)", genes)
    conn.executemany("INSERT INTO transcript VALUES (?, ?)", transcripts)
    conn.commit()
    return conn


@pytest.fixture
def genome_db():
    """Consistent gene/transcript database: every gene has a canonical transcript."""
    conn = build_genome_db(
        genes=[
            (1, "protein_coding", 10),
            (2, "protein_coding", 20),
            (3, "lncRNA", 30),
        ],
        transcripts=[(10, 1), (20, 2), (30, 3)],
    )
    yield conn
    conn.close()


@pytest.fixture
def genome_db_factory():
    """Factory building gene/transcript databases, closed after the test."""
    opened = []

    def factory(genes, transcripts):
        conn = build_genome_db(genes, transcripts)
        opened.append(conn)
        return conn

    yield factory

    for conn in opened:
        conn.close()


@pytest.fixture
def genome_db_file(tmp_path):
    """Factory writing gene/transcript databases to files; returns the path."""
    def factory(filename, genes, transcripts):
        path = tmp_path / filename
        build_genome_db(genes, transcripts, path=str(path)).close()
        return path

    return factory


@pytest.fixture
def write_suite(tmp_path):
    """Factory writing a YAML suite file; returns the path."""
    def factory(text, filename="suite.yaml"):
        path = tmp_path / filename
        path.write_text(text)
        return path

    return factory
