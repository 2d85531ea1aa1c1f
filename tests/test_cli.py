"""Tests for the command line interface."""

import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from noderegistry.cli import main

CATALOG = {
    "node_types": [
        {"identifier": "a.B", "version": "1.0", "description": "First B"},
        {"identifier": "a.B", "version": "2.0", "description": "Second B"},
        {"identifier": "a.C", "version": "1.0"},
    ]
}


def _write_catalog(tmpdir: str) -> str:
    path = Path(tmpdir) / "catalog.yaml"
    with open(path, "w") as f:
        yaml.dump(CATALOG, f)
    return str(path)


def test_list():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["list", _write_catalog(tmpdir)])
        assert result.exit_code == 0
        assert "a.B" in result.output
        assert "2.0" in result.output
        assert "a.C" in result.output


def test_versions_newest_first():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["versions", "a.B", _write_catalog(tmpdir)])
        assert result.exit_code == 0
        assert result.output.index("2.0") < result.output.index("1.0")


def test_resolve_latest_exact_and_spec():
    with tempfile.TemporaryDirectory() as tmpdir:
        catalog = _write_catalog(tmpdir)
        runner = CliRunner()

        result = runner.invoke(main, ["resolve", "a.B", catalog])
        assert result.exit_code == 0
        assert "a.B@2.0" in result.output

        result = runner.invoke(main, ["resolve", "a.B", catalog, "--version", "1.0"])
        assert result.exit_code == 0
        assert "a.B@1.0" in result.output

        result = runner.invoke(main, ["resolve", "a.B", catalog, "--spec", ">=1.0"])
        assert result.exit_code == 0
        assert "a.B@2.0" in result.output


def test_resolve_not_found():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["resolve", "a.B", _write_catalog(tmpdir), "--spec", "=1.5"])
        assert result.exit_code == 1
        assert "cannot find" in result.output


def test_resolve_invalid_spec():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["resolve", "a.B", _write_catalog(tmpdir), "--spec", "<1.0"])
        assert result.exit_code == 1
        assert "Invalid version specifier" in result.output


def test_resolve_from_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        _write_catalog(tmpdir)
        config = Path(tmpdir) / "registry.yaml"
        config.write_text("catalogs:\n  - catalog.yaml\n")
        result = CliRunner().invoke(main, ["--config", str(config), "resolve", "a.C"])
        assert result.exit_code == 0
        assert "a.C@1.0" in result.output


def test_no_catalogs_is_usage_error():
    result = CliRunner().invoke(main, ["list"])
    assert result.exit_code == 2


def test_check_spec():
    runner = CliRunner()
    assert runner.invoke(main, ["check-spec", ">=2.0", "3.0"]).exit_code == 0
    assert runner.invoke(main, ["check-spec", "=2.0", "2.1"]).exit_code == 1


def test_malformed_config_is_reported():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = Path(tmpdir) / "registry.yaml"
        config.write_text('allow_duplicates: "false"\n')
        result = CliRunner().invoke(main, ["--config", str(config), "list"])
        assert result.exit_code == 1
        assert "allow_duplicates" in result.output
