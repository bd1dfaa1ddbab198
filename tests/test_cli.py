"""Tests for the command line interface."""

import os
import socket

import pytest
import typer
import yaml
from typer.testing import CliRunner

from mayasend.cli import CONFIG_FILE, app, parse_lines

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_tmux(monkeypatch):
    monkeypatch.delenv("TMUX", raising=False)


@pytest.fixture
def closed_port() -> int:
    """A local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "mayasend.yaml"
    data = {
        "port": {"host": "127.0.0.1", "timeout": "1s"},
        "log": {"temp_dir": str(tmp_path / "tmp"), "refresh_wait": ""},
    }
    path.write_text(yaml.safe_dump(data))
    return path


class TestParseLines:
    def test_range(self):
        assert parse_lines("3:10") == (3, 10)

    def test_single_line(self):
        assert parse_lines("7") == (7, 7)

    def test_trailing_colon(self):
        assert parse_lines("3:") == (3, 3)

    @pytest.mark.parametrize("value", ["a:b", ":4", ""])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter):
            parse_lines(value)


class TestInit:
    def test_writes_default_config(self, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(app, ["init"])

            assert result.exit_code == 0
            assert os.path.exists(CONFIG_FILE)
            with open(CONFIG_FILE) as f:
                data = yaml.safe_load(f)
            assert data["port"]["port"] == 7001

    def test_keeps_existing_config(self, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            with open(CONFIG_FILE, "w") as f:
                f.write("port:\n  port: 7002\n")

            result = runner.invoke(app, ["init"], input="n\n")

            assert result.exit_code == 0
            with open(CONFIG_FILE) as f:
                assert "7002" in f.read()


class TestStatus:
    def test_overrides(self, config_file):
        result = runner.invoke(app, ["status", "--config", str(config_file), "--port", "9000"])

        assert result.exit_code == 0
        assert "127.0.0.1:9000" in result.output
        assert "ConsoleDisplay" in result.output

    def test_socket_override(self, config_file):
        result = runner.invoke(
            app, ["status", "--config", str(config_file), "--socket", "/tmp/maya.sock"]
        )

        assert result.exit_code == 0
        assert "unix:/tmp/maya.sock" in result.output

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["status", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("port:\n  port: not-a-number\n")

        result = runner.invoke(app, ["status", "--config", str(path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestSend:
    def test_closed_port_fails(self, config_file, closed_port, tmp_path):
        result = runner.invoke(
            app, ["send", "polyCube;", "--config", str(config_file), "--port", str(closed_port)]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        # Temp files are cleaned up even though nothing reached Maya
        assert list((tmp_path / "tmp").iterdir()) == []


class TestRun:
    def test_missing_script(self, config_file, tmp_path):
        result = runner.invoke(
            app, ["run", str(tmp_path / "missing.mel"), "--config", str(config_file)]
        )
        assert result.exit_code == 1

    def test_bad_line_range(self, config_file, tmp_path):
        script = tmp_path / "rig.mel"
        script.write_text("polyCube;\n")

        result = runner.invoke(
            app, ["run", str(script), "--lines", "x:y", "--config", str(config_file)]
        )

        assert result.exit_code != 0


class TestQuery:
    def test_invalid_keyword(self, config_file):
        result = runner.invoke(app, ["query", "1abc", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid keyword" in result.output
