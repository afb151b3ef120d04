"""Shared test fixtures for Strata tests."""

import pytest

from strata.config import AnalysisConfig, LayerConfig
from strata.scanning.models import SourceFile


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def layer_table():
    """Three layers: core (0, isolated) < app (1) < tooling (2)."""
    return (
        LayerConfig("core", 0, ("core",), isolated=True),
        LayerConfig("app", 1, ("app",)),
        LayerConfig("tooling", 2, ("tooling",)),
    )


@pytest.fixture
def config(layer_table):
    """Config over the three-layer table with an ``acme`` package root."""
    return AnalysisConfig(
        layers=layer_table,
        package_roots=("acme",),
        extensions=(".js",),
    )


@pytest.fixture
def make_sources():
    """Build SourceFile records from a {path: text} mapping."""

    def _make(files):
        return [SourceFile(path=path, text=text) for path, text in files.items()]

    return _make


@pytest.fixture
def write_tree(tmp_path):
    """Write a {relative path: text} mapping under tmp_path and return the root."""

    def _write(files):
        for rel, text in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return tmp_path

    return _write
