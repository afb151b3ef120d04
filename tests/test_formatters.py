"""Tests for the formatters package."""

import json
from dataclasses import replace

import pytest

from strata.architecture.analyzer import ArchitectureAnalyzer
from strata.formatters import (
    FormatContext,
    GithubFormatter,
    JsonFormatter,
    RichFormatter,
    get_formatter,
)


@pytest.fixture
def report(config, make_sources):
    sources = make_sources(
        {
            "core/[id].js": "const fs = require('fs');\nimport '../app/main.js';\n",
            "app/main.js": "import '../core/[id].js';\nimport './gone.js';\n",
            "tooling/build.js": "import '../app/main.js';\n",
        }
    )
    return ArchitectureAnalyzer(config).analyze(sources)


@pytest.fixture
def clean_report(config, make_sources):
    return ArchitectureAnalyzer(config).analyze(make_sources({"core/a.js": ""}))


@pytest.fixture
def context(config):
    return FormatContext(config=config)


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("rich"), RichFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("github"), GithubFormatter)

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_valid_json(self, report, context):
        data = json.loads(JsonFormatter().format(report, context))
        assert data["status"] == "violations-found"
        assert data["summary"]["violations"] == 2
        assert [v["module"] for v in data["violations"]["layer-order"]] == ["core/[id].js"]
        assert data["platform_usage"][0]["api"] == "fs"
        assert data["unresolved"] == [{"module": "app/main.js", "specifier": "./gone.js"}]
        assert "graph" not in data

    def test_graph_included_on_request(self, report, config):
        data = json.loads(
            JsonFormatter().format(report, FormatContext(config=config, show_graph=True))
        )
        assert data["graph"].startswith("digraph modules {")

    def test_stable_output(self, report, context):
        assert JsonFormatter().format(report, context) == JsonFormatter().format(report, context)


class TestGithubFormatter:
    def test_annotations(self, report, context):
        lines = GithubFormatter().format(report, context).splitlines()
        assert lines[0].startswith("::error file=core/[id].js,title=layer-order::")
        assert lines[1].startswith("::error file=core/[id].js,title=platform-isolation::")
        assert "(reference 'fs')" in lines[1]
        assert lines[-1] == "strata: 3 files analyzed, 2 violations, 3 modules tracked"

    def test_clean_report_has_only_summary(self, clean_report, context):
        output = GithubFormatter().format(clean_report, context)
        assert output == "strata: 1 files analyzed, 0 violations, 1 modules tracked"


class TestRichFormatter:
    def test_sections(self, report, context):
        text = RichFormatter().format(report, context)
        assert "LAYER VIOLATIONS" in text
        assert "PLATFORM API USAGE" in text
        assert "COUPLING (top 15)" in text
        assert "core/[id].js" in text
        assert "isolation violation" in text
        assert "3 files analyzed, 2 violations, 3 modules tracked" in text
        assert "1 unresolved references" in text

    def test_clean_report(self, clean_report, context):
        text = RichFormatter().format(clean_report, context)
        assert "No layer violations" in text
        assert "No platform API references" in text
        assert "0 violations" in text

    def test_top_n_limits_rows(self, report, config):
        context = FormatContext(config=replace(config, top_n=1))
        text = RichFormatter().format(report, context)
        assert "COUPLING (top 1)" in text
        assert "tooling/build.js" not in text.split("COUPLING")[1]

    def test_graph_section(self, report, config):
        text = RichFormatter().format(report, FormatContext(config=config, show_graph=True))
        assert "digraph modules {" in text
        assert "rankdir=LR;" in text

    def test_single_target_shows_unavailable_afferent(self, config, make_sources, context):
        sources = make_sources({"core/a.js": "import './b.js';\n"})
        report = ArchitectureAnalyzer(config).analyze(
            sources, target="core/a.js", known_paths=["core/b.js"]
        )
        assert "n/a" in RichFormatter().format(report, context)
