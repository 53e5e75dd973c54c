"""Tests for dependency graph construction and exclusion patterns."""

import pytest

from pkgviz.errors import ConfigError
from pkgviz.graph import (
    ExclusionFilter,
    build_dependency_graph,
    compile_exclusions,
    short_name,
)
from pkgviz.model import DEFAULT_PACKAGE, SourceRecord


def _rec(package, *refs, path=None):
    return SourceRecord(
        path=path or f"{package}.java",
        declared_package=package,
        referenced_packages=tuple(refs),
    )


def _edges(graph):
    return {(e.source, e.target): e.weight for e in graph.edges.values()}


class TestBuildDependencyGraph:
    def test_basic_example(self):
        graph = build_dependency_graph(
            [_rec("a.b", "a.c"), _rec("a.c", "a.b"), _rec("a.d", "a.b")]
        )
        assert list(graph.nodes) == ["a.b", "a.c", "a.d"]
        assert _edges(graph) == {("a.b", "a.c"): 1, ("a.c", "a.b"): 1, ("a.d", "a.b"): 1}
        assert list(graph.edges) == ["a.b->a.c", "a.c->a.b", "a.d->a.b"]

    def test_empty(self):
        graph = build_dependency_graph([])
        assert graph.is_empty
        assert graph.edges == {}

    def test_default_package_is_ignored(self):
        graph = build_dependency_graph(
            [_rec(DEFAULT_PACKAGE, "a.b"), _rec("a.b"), _rec("a.c", DEFAULT_PACKAGE)]
        )
        assert list(graph.nodes) == ["a.b", "a.c"]
        assert graph.edges == {}

    def test_no_self_edges(self):
        graph = build_dependency_graph([_rec("a.b", "a.b", "a.c"), _rec("a.c")])
        assert all(e.source != e.target for e in graph.edges.values())
        assert _edges(graph) == {("a.b", "a.c"): 1}

    def test_external_packages_are_dropped(self):
        graph = build_dependency_graph([_rec("a.b", "java.util", "org.slf4j")])
        assert list(graph.nodes) == ["a.b"]
        assert graph.edges == {}

    def test_weight_counts_referencing_files(self):
        graph = build_dependency_graph(
            [
                _rec("a.b", "a.c", path="One.java"),
                _rec("a.b", "a.c", path="Two.java"),
                _rec("a.b", "a.d", path="Three.java"),
                _rec("a.c"),
                _rec("a.d"),
            ]
        )
        assert _edges(graph) == {("a.b", "a.c"): 2, ("a.b", "a.d"): 1}

    def test_file_counts(self):
        graph = build_dependency_graph(
            [_rec("a.b", path="1"), _rec("a.b", path="2"), _rec("a.c", path="3")]
        )
        assert graph.nodes["a.b"].file_count == 2
        assert graph.nodes["a.c"].file_count == 1

    def test_target_seen_before_its_files_gets_no_extra_files(self):
        graph = build_dependency_graph([_rec("a.b", "a.c"), _rec("a.c")])
        assert graph.nodes["a.c"].file_count == 1

    def test_leaf_node_fields(self):
        graph = build_dependency_graph([_rec("com.example.app.ui")])
        node = graph.nodes["com.example.app.ui"]
        assert node.label == "app.ui"
        assert node.depth == 4
        assert not node.is_group
        assert node.child_count == 0
        assert node.parent_id is None

    def test_glob_exclusion_is_anchored(self):
        records = [
            _rec("app.main", "java.util", "javautil.core"),
            _rec("java.util"),
            _rec("javautil.core"),
        ]
        graph = build_dependency_graph(records, ["java.*"])
        assert list(graph.nodes) == ["app.main", "javautil.core"]
        assert _edges(graph) == {("app.main", "javautil.core"): 1}

    def test_prefix_exclusion(self):
        records = [
            _rec("com.acme.app", "com.acme.generated.proto", "com.acme.core"),
            _rec("com.acme.generated.proto"),
            _rec("com.acme.core"),
        ]
        graph = build_dependency_graph(records, ["com.acme.gen"])
        assert list(graph.nodes) == ["com.acme.app", "com.acme.core"]

    def test_deterministic(self):
        records = [_rec("a.b", "a.c", "a.d"), _rec("a.c", "a.b"), _rec("a.d", "a.c")]
        first = build_dependency_graph(records)
        second = build_dependency_graph(records)
        assert first == second


class TestExclusionFilter:
    def test_glob(self):
        f = ExclusionFilter(["java.*"])
        assert f.matches("java.util")
        assert f.matches("java.util.concurrent")
        assert not f.matches("javautil")
        assert not f.matches("java")

    def test_glob_in_middle(self):
        f = ExclusionFilter(["com.*.internal"])
        assert f.matches("com.acme.internal")
        assert not f.matches("com.acme.internal.impl")

    def test_prefix(self):
        f = ExclusionFilter(["org.junit"])
        assert f.matches("org.junit")
        assert f.matches("org.junitx")
        assert not f.matches("org.mockito")

    def test_empty_filter(self):
        f = compile_exclusions([])
        assert not f
        assert not f.matches("anything")

    @pytest.mark.parametrize("pattern", ["", "com.(broken*", None])
    def test_invalid_patterns(self, pattern):
        with pytest.raises(ConfigError):
            compile_exclusions([pattern])

    def test_string_instead_of_list(self):
        with pytest.raises(ConfigError):
            compile_exclusions("java.*")


def test_short_name():
    assert short_name("com.example.app") == "example.app"
    assert short_name("com.example") == "com.example"
    assert short_name("app") == "app"
