"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from varnika.config import Config

ROOT = Path(__file__).resolve().parent.parent


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        config = Config()

        assert config.language == "ml"
        assert config.engine.max_workers == 4
        assert config.engine.joiner_pattern == "~"
        assert config.output.format == "csv"

    def test_yaml_round_trip(self, tmp_path):
        config = Config(language="hi")
        config.stores.learnings_dir = tmp_path / "learn"
        config.output.top_n = 3
        path = tmp_path / "config.yaml"

        config.to_yaml(path)
        loaded = Config.from_yaml(path)

        assert loaded == config

    def test_learnings_dir_string(self):
        config = Config(stores={"learnings_dir": "/tmp/learnings"})

        assert config.stores.learnings_dir == Path("/tmp/learnings")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            Config(output={"format": "xml"})

    def test_invalid_workers(self):
        with pytest.raises(ValidationError):
            Config(engine={"max_workers": 0})

    def test_example_config(self):
        config = Config.from_yaml(ROOT / "config.yaml")

        assert config.language == "ml"
        assert config.stores.vst_dirs == [Path("schemes")]
