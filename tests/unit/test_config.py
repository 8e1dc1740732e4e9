"""Tests for index configuration loading and validation."""

import os

import pytest

from common_utils import load_index_config
from search.config import DEFAULT_SOURCES, IndexConfig


class TestIndexConfig:
    def test_defaults(self):
        config = IndexConfig()
        assert config.sources == DEFAULT_SOURCES
        assert config.class_whitelist == []
        assert config.resolved_roots() == [os.getcwd()]

    def test_from_mapping_accepts_single_string(self):
        config = IndexConfig.from_mapping({"sources": "styles/*.css"})
        assert config.sources == ["styles/*.css"]

    def test_from_mapping_rejects_bad_types(self):
        with pytest.raises(ValueError):
            IndexConfig.from_mapping({"sources": [1, 2]})
        with pytest.raises(ValueError):
            IndexConfig.from_mapping(["sources"])

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="unknown configuration keys"):
            IndexConfig.from_mapping({"source": ["*.css"]})

    def test_invalid_whitelist_patterns_are_skipped(self, caplog):
        config = IndexConfig(class_whitelist=[r"^\.theme-", "(unclosed"])
        compiled = config.compile_whitelist()
        assert [p.pattern for p in compiled] == [r"^\.theme-"]
        assert "Ignoring invalid class whitelist pattern" in caplog.text


class TestLoadIndexConfig:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("DESIGN_TOKENS_CONFIG", "DESIGN_TOKENS_SOURCES", "DESIGN_TOKENS_ROOTS"):
            monkeypatch.delenv(name, raising=False)

    def test_reads_yaml_file(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("sources:\n  - 'src/**/*.css'\nclass_whitelist:\n  - '^\\.theme-'\n")
        config = load_index_config(str(path))
        assert config.sources == ["src/**/*.css"]
        assert config.class_whitelist == ["^\\.theme-"]

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_index_config(str(tmp_path / "absent.yaml"))
        assert config.sources == DEFAULT_SOURCES

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "tokens.yaml"
        path.write_text("sources: ['a.css']\n")
        monkeypatch.setenv("DESIGN_TOKENS_SOURCES", "b.css, c/*.css")
        monkeypatch.setenv("DESIGN_TOKENS_ROOTS", str(tmp_path))
        config = load_index_config(str(path))
        assert config.sources == ["b.css", "c/*.css"]
        assert config.roots == [str(tmp_path)]

    def test_non_mapping_yaml_is_rejected(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_index_config(str(path))
