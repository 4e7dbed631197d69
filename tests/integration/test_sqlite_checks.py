"""
Integration tests running checks against real SQLite databases.

Tests verify:
- Orphan detection in both directions, including NULL foreign keys
- Row diagnostics from real result sets
- Cross-database subtotal comparison between a release and its predecessor
- Dialect quoting against a real driver
"""

import pytest

from datacheck import DataCheck, ResultCollector
from datacheck.cli.connections import NamedConnection
from datacheck.utils.database_types import DatabaseType

pytestmark = pytest.mark.integration


@pytest.fixture
def check(collector):
    return DataCheck(collector)


class TestForeignKeys:
    """fk against real tables"""

    def test_consistent_database_passes_both_ways(self, genome_db, check, collector):
        check.fk(genome_db, "gene", "gene_id", "transcript", both_ways=True)

        assert [o.passed for o in collector.outcomes] == [True, True]

    def test_orphans_found_in_each_direction(self, genome_db_factory, check, collector):
        conn = genome_db_factory(
            genes=[(1, "protein_coding", 10), (2, "lncRNA", 99)],
            transcripts=[(10, 1), (30, 5)],
        )

        check.fk(conn, "gene", "canonical_transcript_id", "transcript", "transcript_id")
        check.fk(conn, "transcript", "gene_id", "gene", both_ways=True)

        results = [(o.name, o.passed, o.details["got"]) for o in collector.outcomes]
        assert results == [
            ("Checking for values in gene.canonical_transcript_id not found in transcript.transcript_id",
             False, 1),
            ("Checking for values in transcript.gene_id not found in gene.gene_id", False, 1),
            ("Checking for values in gene.gene_id not found in transcript.gene_id", False, 1),
        ]

    def test_null_foreign_keys_count_as_orphans(self, genome_db_factory, check, collector):
        conn = genome_db_factory(genes=[(1, "protein_coding", None)], transcripts=[(10, 1)])

        check.fk(conn, "gene", "canonical_transcript_id", "transcript", "transcript_id")

        assert collector.outcomes[0].passed is False

    def test_constraint_limits_the_check(self, genome_db_factory, check, collector):
        conn = genome_db_factory(
            genes=[(1, "protein_coding", 10), (2, "pseudogene", None)],
            transcripts=[(10, 1)],
        )

        check.fk(conn, "gene", "canonical_transcript_id", "transcript", "transcript_id",
                 constraint="gene.biotype <> 'pseudogene'")

        assert collector.outcomes[0].passed is True

    def test_sqlite_quoting(self, genome_db, check, collector):
        check.fk(genome_db, "gene", "gene_id", "transcript", both_ways=True,
                 dialect=DatabaseType.SQLITE)

        assert collector.all_passed


class TestRowDiagnostics:
    """is_rows_zero against real result sets"""

    def test_offending_rows_reported(self, genome_db_factory, check, collector):
        conn = genome_db_factory(
            genes=[(1, None, 10), (2, "lncRNA", 20), (3, None, None)],
            transcripts=[],
        )

        passed = check.is_rows_zero(
            conn,
            "SELECT gene_id, canonical_transcript_id FROM gene WHERE biotype IS NULL ORDER BY gene_id",
            "Genes have a biotype",
            "Gene without biotype",
        )

        assert passed is False
        assert collector.outcomes[0].diagnostics == (
            "Gene without biotype (1, 10)",
            "Gene without biotype (3, NULL)",
        )

    def test_summary_names_the_database(self, genome_db_factory, check, collector):
        conn = genome_db_factory(
            genes=[(i, None, None) for i in range(1, 26)],
            transcripts=[],
        )
        provider = NamedConnection("new", "core_111 (new)", conn)

        check.is_rows_zero(provider, "SELECT gene_id FROM gene WHERE biotype IS NULL")

        diagnostics = collector.outcomes[0].diagnostics
        assert len(diagnostics) == 11
        assert "10 of 25 rows shown" in diagnostics[-1]
        assert "core_111 (new)" in diagnostics[-1]

    def test_counts(self, genome_db, check, collector):
        assert check.is_rows(genome_db, "SELECT COUNT(*) FROM gene", 3) is True
        assert check.cmp_rows(genome_db, "SELECT gene_id FROM gene WHERE biotype = 'lncRNA'", "<=", 1) is True
        assert check.is_rows_nonzero(genome_db, "SELECT COUNT(*) FROM transcript") is True
        assert len(collector) == 3


class TestReleaseComparison:
    """row_totals and row_subtotals across two databases"""

    @pytest.fixture
    def releases(self, genome_db_factory):
        old = genome_db_factory(
            genes=[(i, "protein_coding", None) for i in range(1, 11)]
            + [(i, "lncRNA", None) for i in range(11, 21)]
            + [(21, "miRNA", None)],
            transcripts=[],
        )
        new = genome_db_factory(
            genes=[(i, "protein_coding", None) for i in range(1, 13)]
            + [(i, "lncRNA", None) for i in range(13, 21)],
            transcripts=[],
        )
        return new, old

    def test_row_totals(self, releases, check):
        new, old = releases

        assert check.row_totals(new, old, "SELECT COUNT(*) FROM gene") is False
        assert check.row_totals(new, old, "SELECT COUNT(*) FROM gene", 0.9) is True

    def test_row_subtotals(self, releases, check, collector):
        new, old = releases

        passed = check.row_subtotals(
            new, old, "SELECT biotype, COUNT(*) FROM gene GROUP BY biotype ORDER BY biotype", 0.9,
            "Biotype counts",
        )

        assert passed is False
        assert collector.outcomes[0].diagnostics == (
            "Lower count than expected for lncRNA.\n8 < 10 * 90%",
            "Lower count than expected for miRNA.\n0 < 1 * 90%",
        )
