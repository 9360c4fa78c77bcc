"""
Tests for the command-line entry point.
"""

from pathlib import Path

import pytest

from sshconf.__main__ import main


def test_dump(config_path: Path, sample_config: str, capsys: pytest.CaptureFixture[str]) -> None:
    """--dump writes the reconstructed document to stdout."""
    assert main([str(config_path), "--dump"]) == 0

    assert capsys.readouterr().out == sample_config


def test_validate_is_default(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Without an action the file is validated."""
    assert main([str(config_path)]) == 0

    out = capsys.readouterr().out
    assert "Host blocks: 3" in out
    assert "Configuration is valid!" in out


def test_validate_prints_warnings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Warnings are listed before the summary."""
    path = tmp_path / "config"
    path.write_text("Host a\n  Usr bob\n")

    assert main([str(path), "--validate"]) == 0

    out = capsys.readouterr().out
    assert "Configuration warnings (1):" in out
    assert "Unknown keyword 'Usr'" in out


def test_hosts(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--hosts lists each block's patterns."""
    assert main([str(config_path), "--hosts"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "github.com",
        "staging-* !staging-db",
        "*",
    ]


def test_lookup_key(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--lookup with --key prints the effective value."""
    assert main([str(config_path), "--lookup", "staging-web", "--key", "port"]) == 0

    assert capsys.readouterr().out == "2200\n"


def test_lookup_missing_key(config_path: Path) -> None:
    """An unset key is a failure."""
    assert main([str(config_path), "--lookup", "github.com", "--key", "ProxyJump"]) == 1


def test_lookup_all(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--lookup alone prints each applicable key once, first match winning."""
    assert main([str(config_path), "--lookup", "github.com"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "HostName github.com",
        "User git",
        "IdentityFile ~/.ssh/id_ed25519",
        "ServerAliveInterval 60",
    ]


def test_key_requires_lookup(config_path: Path) -> None:
    """--key on its own is a usage error."""
    with pytest.raises(SystemExit) as exc_info:
        main([str(config_path), "--key", "User"])

    assert exc_info.value.code == 2


def test_missing_file(tmp_path: Path) -> None:
    """A missing file exits with status 1."""
    assert main([str(tmp_path / "missing"), "-q"]) == 1


def test_parse_error(tmp_path: Path) -> None:
    """A Match block exits with status 1."""
    path = tmp_path / "config"
    path.write_text("Match all\n")

    assert main([str(path), "--no-color"]) == 1


def test_log_file(config_path: Path, tmp_path: Path) -> None:
    """--log-file captures debug output from the parser."""
    log_path = tmp_path / "logs" / "sshconf.log"

    assert main([str(config_path), "--hosts", "--log-file", str(log_path)]) == 0

    assert "Host blocks from" in log_path.read_text()


def test_system(monkeypatch: pytest.MonkeyPatch, config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--system reads the system-wide file."""
    monkeypatch.setattr("sshconf.config.loader.DEFAULT_SYSTEM_CONFIG_PATH", str(config_path))

    assert main(["--system", "--hosts"]) == 0

    assert capsys.readouterr().out.splitlines()[0] == "github.com"


def test_system_with_path(config_path: Path) -> None:
    """--system and an explicit path are a usage error."""
    with pytest.raises(SystemExit) as exc_info:
        main([str(config_path), "--system"])

    assert exc_info.value.code == 2
