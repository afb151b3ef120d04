"""Tests for reference resolution."""

from dataclasses import replace

import pytest

from strata.architecture.models import (
    CrossLayer,
    External,
    InternalModule,
    Module,
    PlatformAPI,
    RawReference,
    ReferenceKind,
    Unresolved,
)
from strata.architecture.resolver import is_relative, resolve

ALL_MODULES = frozenset(
    {
        "core/a.js",
        "core/b.js",
        "core/util/index.js",
        "app/main.js",
        "tooling/b.js",
        "index.js",
    }
)


def _resolve(specifier, config, source="core/a.js"):
    ref = RawReference(specifier, ReferenceKind.STATIC)
    return resolve(ref, Module(path=source, layer="core"), ALL_MODULES, config.layers, config)


class TestRelative:
    def test_literal_path(self, config):
        assert _resolve("./b.js", config) == InternalModule("core/b.js")

    def test_implied_extension(self, config):
        assert _resolve("./b", config) == InternalModule("core/b.js")

    def test_parent_directory(self, config):
        assert _resolve("../tooling/b", config) == InternalModule("tooling/b.js")

    def test_directory_index(self, config):
        assert _resolve("./util", config) == InternalModule("core/util/index.js")

    def test_rooted_path(self, config):
        assert _resolve("/app/main.js", config) == InternalModule("app/main.js")

    def test_parent_of_top_level_is_root(self, config):
        assert _resolve("..", config) == InternalModule("index.js")

    def test_missing_module_is_unresolved(self, config):
        assert _resolve("./missing.js", config) == Unresolved("./missing.js")

    def test_escaping_root_is_unresolved(self, config):
        assert _resolve("../../outside.js", config) == Unresolved("../../outside.js")


class TestCrossLayer:
    def test_package_layer_segment(self, config):
        assert _resolve("acme/tooling/build.js", config) == CrossLayer("tooling")

    def test_package_layer_root(self, config):
        assert _resolve("acme/app", config) == CrossLayer("app")

    def test_unknown_layer_segment_is_external(self, config):
        assert _resolve("acme/vite", config) == External("acme/vite")

    def test_bare_package_root_is_external(self, config):
        assert _resolve("acme", config) == External("acme")

    def test_scoped_package_root(self, config):
        scoped = replace(config, package_roots=("@acme/framework",))
        assert _resolve("@acme/framework/core", scoped) == CrossLayer("core")


class TestPlatform:
    @pytest.mark.parametrize("specifier", ["fs", "node:fs", "fs/promises", "node:fs/promises"])
    def test_platform_forms(self, config, specifier):
        assert _resolve(specifier, config) == PlatformAPI("fs")

    def test_other_scheme_is_external(self, config):
        assert _resolve("deno:fs", config) == External("deno:fs")

    def test_unlisted_builtin_is_external(self, config):
        assert _resolve("node:events", config) == External("node:events")


class TestExternal:
    def test_third_party(self, config):
        assert _resolve("vite", config) == External("vite")
        assert _resolve("@scope/pkg", config) == External("@scope/pkg")


def test_is_relative():
    assert is_relative("./a")
    assert is_relative("../a")
    assert is_relative("/a")
    assert is_relative("..")
    assert not is_relative("a/b")
    assert not is_relative(".hidden")
