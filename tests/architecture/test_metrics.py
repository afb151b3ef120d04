"""Tests for coupling metrics."""

import pytest

from strata.architecture.metrics import compute_instability, compute_metrics
from strata.architecture.models import (
    External,
    InternalModule,
    Module,
    PlatformAPI,
    ReferenceKind,
    ResolvedReference,
    Unresolved,
)


def _edge(src, dst, specifier=None):
    return ResolvedReference(
        source=Module(path=src),
        kind=ReferenceKind.STATIC,
        specifier=specifier or f"./{dst}",
        target=InternalModule(dst),
    )


class TestComputeInstability:
    def test_balanced(self):
        assert compute_instability(2, 2) == pytest.approx(0.5)

    def test_only_outgoing(self):
        assert compute_instability(0, 3) == 1.0

    def test_only_incoming(self):
        assert compute_instability(4, 0) == 0.0

    def test_isolated_is_stable(self):
        assert compute_instability(0, 0) == 0.0


class TestComputeMetrics:
    def test_single_edge(self):
        records = compute_metrics([_edge("a.js", "b.js")])
        assert records["a.js"].efferent == 1
        assert records["a.js"].afferent == 0
        assert records["b.js"].afferent == 1
        assert records["b.js"].efferent == 0
        assert records["a.js"].instability == 1.0
        assert records["b.js"].instability == 0.0

    def test_repeated_references_count_once(self):
        refs = [_edge("a.js", "b.js", "./b"), _edge("a.js", "b.js", "./b.js")] * 3
        records = compute_metrics(refs)
        assert records["a.js"].efferent == 1
        assert records["b.js"].afferent == 1
        assert records["a.js"].depends_on == ("b.js",)
        assert records["b.js"].depended_on_by == ("a.js",)

    def test_self_reference_excluded(self):
        records = compute_metrics([_edge("a.js", "a.js")])
        assert records["a.js"].afferent == 0
        assert records["a.js"].efferent == 0
        assert records["a.js"].instability == 0.0

    def test_mutual_references(self):
        records = compute_metrics([_edge("x.js", "y.js"), _edge("y.js", "x.js")])
        for path in ("x.js", "y.js"):
            assert records[path].afferent == 1
            assert records[path].efferent == 1
            assert records[path].instability == pytest.approx(0.5)

    def test_non_internal_targets_ignored(self):
        source = Module(path="a.js")
        refs = [
            ResolvedReference(source, ReferenceKind.STATIC, "vite", External("vite")),
            ResolvedReference(source, ReferenceKind.PLATFORM_REQUIRE, "fs", PlatformAPI("fs")),
            ResolvedReference(source, ReferenceKind.STATIC, "./x", Unresolved("./x")),
        ]
        records = compute_metrics(refs)
        assert records["a.js"].efferent == 0
        assert set(records) == {"a.js"}

    def test_tracked_module_without_edges(self):
        records = compute_metrics([], modules=["lonely.js"])
        record = records["lonely.js"]
        assert (record.afferent, record.efferent, record.instability) == (0, 0, 0.0)

    def test_afferent_unavailable(self):
        records = compute_metrics(
            [_edge("a.js", "b.js")], afferent_available=False
        )
        assert records["b.js"].afferent == 0
        assert records["b.js"].depended_on_by == ()
        assert not records["b.js"].afferent_available
        assert records["a.js"].efferent == 1

    def test_symmetry_over_star(self):
        refs = [_edge("hub.js", leaf) for leaf in ("a.js", "b.js", "c.js")]
        refs += [_edge(leaf, "hub.js") for leaf in ("a.js", "b.js")]
        records = compute_metrics(refs)
        assert sum(r.afferent for r in records.values()) == sum(
            r.efferent for r in records.values()
        )
        assert records["hub.js"].efferent == 3
        assert records["hub.js"].afferent == 2

    def test_instability_bounds(self):
        refs = [_edge("a.js", "b.js"), _edge("b.js", "c.js"), _edge("c.js", "a.js")]
        refs.append(_edge("d.js", "a.js"))
        for record in compute_metrics(refs, modules=["e.js"]).values():
            assert 0.0 <= record.instability <= 1.0
            if record.total == 0:
                assert record.instability == 0.0
