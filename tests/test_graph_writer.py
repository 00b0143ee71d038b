"""
Tests for writing SIF/format file pairs.
"""

import os

import pytest

from phospho_causal.exceptions import GraphWriteError
from phospho_causal.network.graph import GENE_CENTRIC, GraphAssembler, GraphModel
from phospho_causal.network.nodes import GeneNode
from phospho_causal.network.writer import GraphWriter
from phospho_causal.utils.io import write_text_files_atomically


@pytest.fixture
def graph(signaling_data, run_search, make_loader):
    rows, relations = signaling_data
    result = run_search(rows, relations)
    return GraphAssembler(result.verdicts, make_loader(rows).measurements).build_gene_centric()


def node_ids_in_format(path):
    ids = set()
    for line in path.read_text().splitlines():
        fields = line.split("\t")
        if fields[0] == "node":
            ids.add(fields[1])
    return ids


def node_ids_in_sif(path):
    ids = set()
    for line in path.read_text().splitlines():
        source, _, target = line.split("\t")
        ids.update([source, target])
    return ids


class TestGraphWriter:
    """Tests for GraphWriter."""

    def test_write_pair(self, graph, tmp_path):
        sif_path, format_path = GraphWriter(graph).write(tmp_path / "causative")

        assert sif_path == tmp_path / "causative.sif"
        assert format_path == tmp_path / "causative.format"
        assert sif_path.read_text() == (
            "AKT1\tphosphorylates\tGSK3B\n"
            "MYC\tdownregulates-expression\tCCND1\n"
        )

    def test_format_lines(self, graph):
        lines = GraphWriter(graph).format_lines()

        assert lines[0] == "node\tAKT1\tcolor\t255 40 40"
        assert "node\tGSK3B\trppasite\tGSK3B_pS9|p|255 40 40|0 0 0" in lines
        assert "edge\tAKT1 phosphorylates GSK3B\tcolor\t0 130 0" in lines
        assert "edge\tMYC downregulates-expression CCND1\twidth\t2" in lines

        node_lines = [l for l in lines if l.startswith("node")]
        assert lines[:len(node_lines)] == node_lines

    def test_node_ids_coincide(self, graph, tmp_path):
        sif_path, format_path = GraphWriter(graph).write(tmp_path / "out")
        assert node_ids_in_format(format_path) == node_ids_in_sif(sif_path)

    def test_byte_identical_output(self, signaling_data, run_search, make_loader, tmp_path):
        rows, relations = signaling_data

        outputs = []
        for name, rels in (("first", relations), ("second", list(reversed(relations)))):
            result = run_search(rows, rels)
            graph = GraphAssembler(result.verdicts, make_loader(rows).measurements).build_gene_centric()
            outputs.append(GraphWriter(graph).write(tmp_path / name))

        (sif_a, format_a), (sif_b, format_b) = outputs
        assert sif_a.read_bytes() == sif_b.read_bytes()
        assert format_a.read_bytes() == format_b.read_bytes()

    def test_empty_graph(self, tmp_path):
        sif_path, format_path = GraphWriter(GraphModel(GENE_CENTRIC)).write(tmp_path / "empty")

        assert sif_path.read_text() == ""
        assert format_path.read_text() == ""

    def test_utf8_output(self, tmp_path):
        sif_path, = write_text_files_atomically({tmp_path / "x.sif": "GÉNE\tphosphorylates\tB\n"})
        assert sif_path.read_bytes() == "GÉNE\tphosphorylates\tB\n".encode("utf-8")

    def test_file_mode_follows_umask(self, graph, tmp_path):
        umask = os.umask(0o022)
        try:
            sif_path, format_path = GraphWriter(graph).write(tmp_path / "causative")
        finally:
            os.umask(umask)

        assert sif_path.stat().st_mode & 0o777 == 0o644
        assert format_path.stat().st_mode & 0o777 == 0o644


class TestWriteFailures:
    """Integrity checks and atomicity."""

    def test_isolated_node_rejected(self, tmp_path):
        graph = GraphModel(GENE_CENTRIC)
        graph.add_node(GeneNode(symbol="AKT1"))

        with pytest.raises(GraphWriteError):
            GraphWriter(graph).write(tmp_path / "bad")

        assert not (tmp_path / "bad.sif").exists()
        assert not (tmp_path / "bad.format").exists()

    def test_failed_replace_leaves_no_files(self, graph, tmp_path, monkeypatch):
        real_replace = os.replace
        calls = []

        def flaky_replace(src, dst):
            calls.append(dst)
            if len(calls) == 2:
                raise OSError("disk full")
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", flaky_replace)

        with pytest.raises(GraphWriteError):
            GraphWriter(graph).write(tmp_path / "causative")

        assert not (tmp_path / "causative.sif").exists()
        assert not (tmp_path / "causative.format").exists()
        assert list(tmp_path.iterdir()) == []

    def test_failed_encoding_leaves_no_files(self, tmp_path):
        contents = {
            tmp_path / "x.sif": "AKT1\tphosphorylates\tGSK3B\n",
            tmp_path / "x.format": "node\tGSK3B\ttooltip\t\ud800\n",
        }

        with pytest.raises(GraphWriteError):
            write_text_files_atomically(contents)

        assert list(tmp_path.iterdir()) == []

    def test_failure_inside_write_leaves_no_files(self, graph, tmp_path, monkeypatch):
        real_fdopen = os.fdopen

        class BrokenFile:
            def __init__(self, f):
                self.f = f

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self.f.close()

            def write(self, text):
                raise RuntimeError("device vanished")

        monkeypatch.setattr(os, "fdopen", lambda *a, **kw: BrokenFile(real_fdopen(*a, **kw)))

        with pytest.raises(GraphWriteError):
            GraphWriter(graph).write(tmp_path / "causative")

        assert list(tmp_path.iterdir()) == []

    def test_write_error_is_os_error(self):
        assert issubclass(GraphWriteError, OSError)
