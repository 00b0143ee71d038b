"""
Shared fixtures for phospho-causal tests.
"""

import pytest

from phospho_causal.analyzer.searcher import CausalitySearcher
from phospho_causal.data.detectors import ThresholdDetector
from phospho_causal.data.loader import ProteomicsLoader
from phospho_causal.data.measurements import MeasurementKind
from phospho_causal.data.reader import parse_sites
from phospho_causal.data.rows import Effect, MeasurementRow
from phospho_causal.network.relations import Relation, RelationType


def build_row(row_id, symbols, sites="", effect=Effect.UNKNOWN, value=0.0, activity=False):
    """Row from compact arguments: ``symbols="AKT1 AKT2"``, ``sites="S473 S474"``."""
    symbols = tuple(symbols.split())
    return MeasurementRow(
        id=row_id,
        symbols=symbols,
        sites=parse_sites(sites, len(symbols)) if sites else (),
        effect=effect,
        values=(float(value),),
        activity=activity,
    )


def build_loader(rows, value_threshold=0.001, activity_threshold=0.1):
    loader = ProteomicsLoader(rows)
    loader.associate_change_detector(ThresholdDetector(value_threshold), MeasurementKind.PROTEIN)
    loader.associate_change_detector(ThresholdDetector(activity_threshold), MeasurementKind.ACTIVITY)
    return loader


@pytest.fixture(scope="session")
def make_row():
    return build_row


@pytest.fixture(scope="session")
def make_loader():
    return build_loader


@pytest.fixture(scope="session")
def run_search():
    """Run a causality search over rows and relations."""
    def _run(rows, relations, **kwargs):
        loader = build_loader(rows)
        return CausalitySearcher(**kwargs).run(loader.decorate_relations(relations))
    return _run


@pytest.fixture
def signaling_data():
    """Small data set with one phosphorylation and one expression relation."""
    rows = [
        build_row("AKT1", "AKT1", value=2.0),
        build_row("GSK3B_pS9", "GSK3B", "S9", value=2.0),
        build_row("MYC", "MYC", value=0.8),
        build_row("CCND1", "CCND1", value=-2.0),
        build_row("EGFR", "EGFR", value=0.0),
    ]
    relations = [
        Relation("AKT1", "GSK3B", RelationType.PHOSPHORYLATES, sites=("S9",)),
        Relation("MYC", "CCND1", RelationType.DOWNREGULATES_EXPRESSION),
        Relation("EGFR", "MYC", RelationType.UPREGULATES_EXPRESSION),
    ]
    return rows, relations


@pytest.fixture
def input_files(tmp_path):
    """Platform, values and network files of a small run."""
    platform = tmp_path / "platform.txt"
    platform.write_text(
        "ID\tSymbols\tSites\tEffect\n"
        "AKT1_pS473\tAKT1\tS473\t\n"
        "GSK3B_pS9\tGSK3B\tS9\t\n"
        "MYC\tMYC\t\t\n"
        "CCND1\tCCND1\t\t\n"
        "EGFR\tEGFR\t\t\n"
    )
    values = tmp_path / "values.txt"
    values.write_text(
        "ID\tValue\n"
        "AKT1_pS473\t1.5\n"
        "GSK3B_pS9\t2.0\n"
        "MYC\t0.8\n"
        "CCND1\t0.6\n"
        "EGFR\t0\n"
    )
    network = tmp_path / "signed-network.txt"
    network.write_text(
        "AKT1\tphosphorylates\tGSK3B\t\tS9\n"
        "MYC\tupregulates-expression\tCCND1\n"
        "EGFR\tupregulates-expression\tMYC\n"
    )
    site_effects = tmp_path / "site-effects.txt"
    site_effects.write_text("gene\tsite\teffect\nAKT1\tS473\t+\n")

    return {
        "platform_file": str(platform),
        "values_file": str(values),
        "resource_dir": str(tmp_path),
        "network_file": network.name,
        "site_effect_file": site_effects.name,
        "output_prefix": str(tmp_path / "out" / "causative"),
    }
