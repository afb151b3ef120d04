"""Tests for the source set provider and safe file reads."""

import os
from dataclasses import replace
from pathlib import Path

import pytest

from strata.exceptions import FileAccessError, InvalidPathError
from strata.file_ops import safe_read_file, should_skip_file
from strata.scanning import collect_sources, list_source_paths, read_source


class TestListSourcePaths:
    def test_scans_layer_directories_only(self, write_tree, config):
        root = write_tree(
            {
                "core/a.js": "",
                "app/main.js": "",
                "tooling/deep/b.js": "",
                "docs/example.js": "",
                "core/readme.md": "",
            }
        )
        rel = [p.relative_to(root).as_posix() for p in list_source_paths(root, config)]
        assert rel == ["app/main.js", "core/a.js", "tooling/deep/b.js"]

    def test_exclude_patterns(self, write_tree, config):
        root = write_tree(
            {
                "core/a.js": "",
                "core/a.test.js": "",
                "core/node_modules/dep/index.js": "",
                "app/dist/bundle.js": "",
            }
        )
        rel = [p.relative_to(root).as_posix() for p in list_source_paths(root, config)]
        assert rel == ["core/a.js"]

    def test_source_dirs_override(self, write_tree, config):
        root = write_tree({"core/a.js": "", "scripts/x.js": ""})
        paths = list_source_paths(root, replace(config, source_dirs=("scripts",)))
        assert [p.name for p in paths] == ["x.js"]

    def test_missing_root(self, tmp_path, config):
        with pytest.raises(InvalidPathError):
            list_source_paths(tmp_path / "nope", config)


class TestCollectSources:
    def test_reads_canonical_paths(self, write_tree, config):
        root = write_tree({"core/a.js": "import './b.js';", "core/b.js": ""})
        source_set = collect_sources(root, config)
        assert [f.path for f in source_set.files] == ["core/a.js", "core/b.js"]
        assert source_set.files[0].text == "import './b.js';"
        assert source_set.skipped == []

    def test_oversized_file_is_skipped(self, write_tree, config):
        root = write_tree({"core/a.js": "x" * 2048, "core/b.js": ""})
        small = replace(config, max_file_size_mb=1 / 1024)
        source_set = collect_sources(root, small)
        assert [f.path for f in source_set.files] == ["core/b.js"]
        assert source_set.skipped == ["core/a.js"]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX non-root")
    def test_unreadable_file_is_skipped(self, write_tree, config):
        root = write_tree({"core/a.js": "", "core/b.js": ""})
        (root / "core/a.js").chmod(0)
        try:
            source_set = collect_sources(root, config)
        finally:
            (root / "core/a.js").chmod(0o644)
        assert source_set.skipped == ["core/a.js"]

    def test_read_source_missing(self, tmp_path, config):
        with pytest.raises(FileAccessError):
            read_source(tmp_path / "core/gone.js", tmp_path, config)


class TestSafeReadFile:
    def test_invalid_utf8_replaced(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_bytes(b"import x from './\xff.js';")
        assert "�" in safe_read_file(path)

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(FileAccessError) as exc_info:
            safe_read_file(tmp_path)
        assert exc_info.value.reason == "Not a file or does not exist"

    def test_size_limit(self, tmp_path):
        path = tmp_path / "big.js"
        path.write_text("x" * 100)
        with pytest.raises(FileAccessError, match="Cannot access file"):
            safe_read_file(path, max_bytes=10)


class TestShouldSkipFile:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("core/a.test.js", True),
            ("core/a.js", False),
            ("node_modules/x/index.js", True),
            ("runtime/node_modules/x/index.js", True),
            ("runtime/dist.js", False),
            ("dist/a.js", True),
        ],
    )
    def test_patterns(self, path, expected):
        patterns = ("*.test.js", "node_modules/*", "dist/*")
        assert should_skip_file(Path(path), patterns) is expected
