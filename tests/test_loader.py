"""
Tests for ProteomicsLoader.
"""

from phospho_causal.data.loader import ProteomicsLoader
from phospho_causal.data.rows import MeasurementRow
from phospho_causal.network.relations import Relation, RelationType


class TestLoaderConstruction:
    """Tests for building measurements from rows."""

    def test_invalid_rows_skipped(self, make_row):
        rows = [
            make_row("AKT1", "AKT1", value=1.0),
            MeasurementRow(id="", symbols=("AKT1",)),
            MeasurementRow(id="nosym", symbols=()),
            make_row("AKT1", "AKT1", value=2.0),
        ]
        loader = ProteomicsLoader(rows)

        assert [m.id for m in loader.measurements] == ["AKT1"]
        assert loader.skipped_rows == 3
        # First occurrence kept
        assert loader.measurements[0].value == 1.0

    def test_multi_gene_row_indexed_per_gene(self, make_row):
        loader = ProteomicsLoader([
            make_row("AKT_pS473", "AKT1 AKT2", "S473 S474"),
            make_row("AKT1_tot", "AKT1"),
        ])

        assert [m.id for m in loader.get_measurements("AKT1")] == ["AKT1_tot", "AKT_pS473"]
        assert [m.id for m in loader.get_measurements("AKT2")] == ["AKT_pS473"]
        assert loader.get_measurements("MTOR") == ()
        assert loader.genes == ["AKT1", "AKT2"]


class TestDecorateRelations:
    """Tests for joining measurements onto relations."""

    def test_decoration_does_not_touch_relations(self, make_row):
        loader = ProteomicsLoader([make_row("MYC", "MYC"), make_row("CCND1", "CCND1")])
        relation = Relation("MYC", "CCND1", RelationType.UPREGULATES_EXPRESSION)

        decorated = loader.decorate_relations([relation])[0]

        assert decorated.relation is relation
        assert [m.id for m in decorated.source_data] == ["MYC"]
        assert [m.id for m in decorated.target_data] == ["CCND1"]

    def test_missing_data_gives_empty_tuples(self, make_row):
        loader = ProteomicsLoader([make_row("MYC", "MYC")])
        decorated = loader.decorate_relations([
            Relation("MYC", "CCND1", RelationType.UPREGULATES_EXPRESSION)
        ])[0]

        assert decorated.target_data == ()

    def test_sorted_by_relation(self, make_row):
        loader = ProteomicsLoader([make_row("A", "A")])
        relations = [
            Relation("B", "C", RelationType.PHOSPHORYLATES),
            Relation("A", "C", RelationType.PHOSPHORYLATES),
            Relation("A", "B", RelationType.PHOSPHORYLATES),
        ]

        decorated = loader.decorate_relations(relations)
        assert [d.key for d in decorated] == [
            ("A", "phosphorylates", "B"),
            ("A", "phosphorylates", "C"),
            ("B", "phosphorylates", "C"),
        ]
