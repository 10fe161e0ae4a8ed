import socket

import pytest

from sensorlink.cli import main, parse_args, usage
from sensorlink.utils import DEFAULT_SERVER_PORT, VIEW_SERVER_LOCALHOST, Mode


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_usage_names_program_and_modes():
    text = usage("node")
    assert text.startswith("Usage: node <mode> <server_ip> <id>")
    assert "--server | -S | --client | -C" in text


def test_parse_args_defaults():
    config = parse_args([])
    assert config.mode == Mode(0)
    assert config.server_ip == VIEW_SERVER_LOCALHOST
    assert config.server_port == DEFAULT_SERVER_PORT
    assert config.id == 0


@pytest.mark.parametrize("flag", ["--server", "-S"])
def test_parse_args_server_mode(flag):
    assert parse_args([flag]).mode == Mode.SERVER


@pytest.mark.parametrize("flag", ["--client", "-C"])
def test_parse_args_client_mode(flag):
    assert parse_args([flag]).mode == Mode.CLIENT


def test_parse_args_short_options():
    config = parse_args(["-C", "-I", "10.0.0.1", "-P", "1234", "-ID", "7"])
    assert config.mode == Mode.CLIENT
    assert config.server_ip == "10.0.0.1"
    assert config.server_port == 1234
    assert config.id == 7


def test_parse_args_long_options_and_last_mode_wins():
    config = parse_args(["--client", "--ip", "10.0.0.2", "--port", "4321", "--id", "-3", "--server"])
    assert config.mode == Mode.SERVER
    assert config.server_ip == "10.0.0.2"
    assert config.server_port == 4321
    assert config.id == -3


def test_parse_args_numbers_stop_at_non_digit():
    assert parse_args(["--port", "12ab"]).server_port == 12


def test_parse_args_ignores_unknown_arguments():
    assert parse_args(["--verbose", "-S"]).mode == Mode.SERVER


@pytest.mark.parametrize("flag", ["--ip", "-P", "--id"])
def test_parse_args_missing_value_raises(flag):
    with pytest.raises(ValueError, match="missing value"):
        parse_args([flag])


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_main_with_missing_value_prints_usage(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--ip"]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_main_without_mode_creates_database(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--id", "3"]) == 0
    assert (tmp_path / "view" / "data.db").is_file()


def test_main_client_without_server_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--client", "-P", str(_free_port())]) == 1
    assert "Connect failed" in capsys.readouterr().err