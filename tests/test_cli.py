"""Tests for the stacky-lsp command line."""

from pathlib import Path
from unittest import mock

import pytest

from stacky_lsp import __version__
from stacky_lsp.cli import build_parser, main, resolve_config
from stacky_lsp.cli.errors import CLIConfigError, CLIServerError, format_cli_error


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_flags_override_config_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("STACKY_LSP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("STACKY_LSP_LOG_FILE", raising=False)
    (tmp_path / "stacky.toml").write_text('[lsp]\nlog_level = "debug"\n', encoding="utf-8")
    args = build_parser().parse_args(["--workspace", str(tmp_path), "--log-level", "error"])
    config = resolve_config(args)
    assert config.log_level == "error"


def test_bad_config_becomes_cli_error(tmp_path: Path) -> None:
    (tmp_path / "stacky.toml").write_text("[lsp\n", encoding="utf-8")
    args = build_parser().parse_args(["--workspace", str(tmp_path)])
    with pytest.raises(CLIConfigError) as excinfo:
        resolve_config(args)
    assert excinfo.value.code == "CLI_CONFIG_ERROR"


def test_main_exits_with_formatted_error(tmp_path: Path, capsys) -> None:
    (tmp_path / "stacky.toml").write_text("[lsp\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--workspace", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "Error [CLI_CONFIG_ERROR]" in capsys.readouterr().err


def test_main_starts_server_over_stdio(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("STACKY_LSP_LOG_FILE", raising=False)
    server = mock.Mock()
    with mock.patch("stacky_lsp.lsp.server.create_server", return_value=server) as factory, mock.patch(
        "stacky_lsp.cli.configure_logging"
    ) as configure:
        main(["--workspace", str(tmp_path), "--log-level", "debug"])
    factory.assert_called_once()
    server.start_io.assert_called_once_with()
    configure.assert_called_once_with("debug", None)


def test_server_crash_is_reported(tmp_path: Path, capsys) -> None:
    server = mock.Mock()
    server.start_io.side_effect = RuntimeError("pipe closed")
    with mock.patch("stacky_lsp.lsp.server.create_server", return_value=server), mock.patch(
        "stacky_lsp.cli.configure_logging"
    ):
        with pytest.raises(SystemExit):
            main(["--workspace", str(tmp_path)])
    assert "Language server stopped unexpectedly: pipe closed" in capsys.readouterr().err


def test_format_cli_error_plain_exception() -> None:
    assert format_cli_error(ValueError("boom")) == "Error: ValueError: boom"
    formatted = format_cli_error(CLIServerError("down", hint="retry"))
    assert formatted == "Error [CLI_SERVER_ERROR]: down\nHint: retry"
