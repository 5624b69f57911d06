"""
Tests for the command line entry point.
"""

import json

import pytest

from ucan_fixtures import cli
from ucan_fixtures.errors import CatalogError


class TestCli:
    """Tests for main()."""

    def test_writes_fixtures(self, tmp_path, monkeypatch):
        monkeypatch.delenv("UCAN_FIXTURES_VERSION", raising=False)
        with pytest.raises(SystemExit) as exc:
            cli.main(["--output-dir", str(tmp_path), "--indent", "2"])
        assert exc.value.code == 0

        out = tmp_path / "0.10.0"
        assert sorted(p.name for p in out.iterdir()) == [
            "all.json",
            "build.json",
            "cid.json",
            "refute.json",
            "verify.json",
        ]
        assert json.loads((out / "cid.json").read_text())[0]["task"] == "toCID"

    def test_config_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("UCAN_FIXTURES_OUTPUT_DIR", raising=False)
        monkeypatch.delenv("UCAN_FIXTURES_VERSION", raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"output_dir": str(tmp_path / "out"), "indent": 2}))

        with pytest.raises(SystemExit) as exc:
            cli.main(["--config", str(path)])
        assert exc.value.code == 0
        assert (tmp_path / "out" / "0.10.0" / "all.json").is_file()

    def test_flags_override_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"version": "0.9.1", "strict": True}))
        args = cli.build_parser().parse_args(["--config", str(path), "--no-strict"])

        config = cli.configure(args)
        assert config.strict is False

    def test_bad_environment_exit_code(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("UCAN_FIXTURES_INDENT", "two")
        with pytest.raises(SystemExit) as exc:
            cli.main(["--output-dir", str(tmp_path)])
        assert exc.value.code == 2
        assert "Error generating fixtures" in capsys.readouterr().err

    def test_missing_config_file_exit_code(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--config", str(tmp_path / "missing.json")])
        assert exc.value.code == 2

    def test_configure(self):
        args = cli.build_parser().parse_args(
            ["--version", "0.9.1", "--no-strict", "--log-level", "debug"]
        )
        config = cli.configure(args)
        assert config.version == "0.9.1"
        assert config.strict is False
        assert config.log_level == "DEBUG"

    def test_fixture_error_exit_code(self, tmp_path, monkeypatch, capsys):
        async def failing_run(config):
            raise CatalogError("scenario failed", scenario="x")

        monkeypatch.setattr(cli, "run", failing_run)
        with pytest.raises(SystemExit) as exc:
            cli.main(["--output-dir", str(tmp_path)])
        assert exc.value.code == 1
        assert "scenario failed" in capsys.readouterr().err
