"""
Tests for GeneratorConfig.
"""

import json
from pathlib import Path

from ucan_fixtures.config import GeneratorConfig


class TestGeneratorConfig:
    """Tests for defaults, files and environment overrides."""

    def test_defaults(self, monkeypatch):
        for var in ("VERSION", "OUTPUT_DIR", "INDENT", "STRICT", "LOG_LEVEL"):
            monkeypatch.delenv(f"UCAN_FIXTURES_{var}", raising=False)
        config = GeneratorConfig()
        assert config.version == "0.10.0"
        assert config.strict is True
        assert config.indent is None
        assert config.output_path == Path("fixtures") / "0.10.0"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UCAN_FIXTURES_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("UCAN_FIXTURES_INDENT", "2")
        monkeypatch.setenv("UCAN_FIXTURES_STRICT", "false")
        monkeypatch.setenv("UCAN_FIXTURES_VERSION", "0.9.1")

        config = GeneratorConfig()
        assert config.output_path == tmp_path / "0.9.1"
        assert config.indent == 2
        assert config.strict is False

    def test_load(self, monkeypatch, tmp_path):
        monkeypatch.delenv("UCAN_FIXTURES_STRICT", raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"output_dir": "out", "strict": False}))

        config = GeneratorConfig.load(path)
        assert config.output_dir == Path("out")
        assert config.strict is False
        assert config.to_dict()["output_dir"] == "out"
