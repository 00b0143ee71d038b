"""
Tests for the signed network loader and relation types.
"""

import gzip

import pytest

from phospho_causal.data.rows import Effect
from phospho_causal.exceptions import ProteomicsFileError
from phospho_causal.network.loader import NetworkLoader
from phospho_causal.network.relations import Relation, RelationType


@pytest.fixture
def network_file(tmp_path):
    path = tmp_path / "signed-network.txt"
    path.write_text(
        "# signed network\n"
        "source\ttype\ttarget\tmediators\tsites\n"
        "AKT1\tphosphorylates\tGSK3B\tPMID:1\tS9\n"
        "AKT1\tphosphorylates\tGSK3B\tPMID:2\tS21;S9\n"
        "MYC\tupregulates-expression\tCCND1\n"
        "PTEN\tdephosphorylates\tAKT1\t\t\n"
        "TP53\tbinds\tMDM2\n"
        "\tphosphorylates\tGSK3B\n"
        "short\tline\n"
        "\n"
    )
    return path


class TestRelationType:
    """Tests for relation types."""

    def test_signs(self):
        assert RelationType.UPREGULATES_EXPRESSION.sign == 1
        assert RelationType.DOWNREGULATES_EXPRESSION.sign == -1
        assert RelationType.PHOSPHORYLATES.sign == 1
        assert RelationType.DEPHOSPHORYLATES.sign == -1

    def test_site_specific(self):
        assert RelationType.PHOSPHORYLATES.site_specific
        assert not RelationType.UPREGULATES_EXPRESSION.site_specific

    def test_from_label(self):
        assert RelationType.from_label(" Phosphorylates ") == RelationType.PHOSPHORYLATES
        assert RelationType.from_label("binds") is None


class TestNetworkLoader:
    """Tests for NetworkLoader."""

    def test_load(self, network_file):
        loader = NetworkLoader(network_file)
        relations = {r.key: r for r in loader.load()}

        assert set(relations) == {
            ("AKT1", "phosphorylates", "GSK3B"),
            ("MYC", "upregulates-expression", "CCND1"),
            ("PTEN", "dephosphorylates", "AKT1"),
        }
        assert relations[("PTEN", "dephosphorylates", "AKT1")].sites == ()
        assert relations[("PTEN", "dephosphorylates", "AKT1")].sign == -1

    def test_sites_merged(self, network_file):
        relations = {r.key: r for r in NetworkLoader(network_file).load()}
        assert relations[("AKT1", "phosphorylates", "GSK3B")].sites == ("S21", "S9")

    def test_skipped_lines_counted(self, network_file):
        loader = NetworkLoader(network_file)
        loader.load()

        # header, unknown type, missing source, short line
        assert loader.skipped_lines == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            NetworkLoader(tmp_path / "absent.txt").load()

    def test_gzip_network(self, tmp_path):
        path = tmp_path / "signed-network.txt.gz"
        with gzip.open(path, "wt") as f:
            f.write("AKT1\tphosphorylates\tGSK3B\t\tS9\n")

        relations = NetworkLoader(path).load()
        assert {r.key for r in relations} == {("AKT1", "phosphorylates", "GSK3B")}

    def test_undecodable_file_named_in_error(self, tmp_path):
        path = tmp_path / "signed-network.txt"
        with gzip.open(path, "wt") as f:
            f.write("AKT1\tphosphorylates\tGSK3B\n")

        with pytest.raises(ProteomicsFileError, match="signed-network.txt"):
            NetworkLoader(path).load()

    def test_source_sites_and_mediators(self, tmp_path):
        path = tmp_path / "signed-network.txt"
        path.write_text(
            "PDPK1\tphosphorylates\tAKT1\tPMID:1\tT308\tS241\t+\n"
            "PDPK1\tphosphorylates\tAKT1\tPMID:2;PMID:1\tT308\tS241\tactivating\n"
            "SRC\tphosphorylates\tPTK2\tPMID:3\tY397\tY419\t+\n"
            "SRC\tphosphorylates\tPTK2\t\tY397\tY530\t-\n"
        )
        relations = {r.key: r for r in NetworkLoader(path).load()}

        pdpk1 = relations[("PDPK1", "phosphorylates", "AKT1")]
        assert pdpk1.source_sites == ("S241",)
        assert pdpk1.source_site_effect == Effect.ACTIVATING
        assert pdpk1.mediators == ("PMID:1", "PMID:2")

        # Lines disagreeing on the source effect leave it unknown
        src = relations[("SRC", "phosphorylates", "PTK2")]
        assert src.source_sites == ("Y419", "Y530")
        assert src.source_site_effect == Effect.UNKNOWN

    def test_mediators_not_part_of_identity(self):
        a = Relation("AKT1", "GSK3B", RelationType.PHOSPHORYLATES, mediators=("PMID:1",))
        b = Relation("AKT1", "GSK3B", RelationType.PHOSPHORYLATES)
        assert a == b
        assert len({a, b}) == 1

    def test_source_site_effect_reaches_search(self, tmp_path, make_row, run_search):
        path = tmp_path / "signed-network.txt"
        path.write_text("GSK3B\tphosphorylates\tCTNNB1\t\tS33\tS9\t-\n")
        rows = [
            make_row("GSK3B_pS9", "GSK3B", "S9", value=1.0),
            make_row("CTNNB1_pS33", "CTNNB1", "S33", value=-1.0),
        ]

        result = run_search(rows, NetworkLoader(path).load())

        assert len(result) == 1
        assert result.verdicts[0].evidence.source_effect == -1

    def test_relation_str(self):
        relation = Relation("AKT1", "GSK3B", RelationType.PHOSPHORYLATES, sites=("S9",))
        assert str(relation) == "AKT1 phosphorylates GSK3B [S9]"
        assert relation.is_valid
        assert not Relation(" ", "GSK3B", RelationType.PHOSPHORYLATES).is_valid
