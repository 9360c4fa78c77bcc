"""
Pytest configuration and fixtures.
"""

import logging
from pathlib import Path

import pytest


SAMPLE_CONFIG = """\
Host github.com # code
  HostName github.com
  User git
  IdentityFile ~/.ssh/id_ed25519

    # staging boxes
Host staging-* !staging-db
  Port = 2200
  ForwardAgent yes # needed for deploys

Host *
  User nobody
  ServerAliveInterval 60
"""


@pytest.fixture
def sample_config() -> str:
    """Canonically formatted config text that round-trips byte for byte."""
    return SAMPLE_CONFIG


@pytest.fixture
def config_path(tmp_path: Path, sample_config: str) -> Path:
    """Path to a config file holding the sample config."""
    path = tmp_path / "config"
    path.write_text(sample_config, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("sshconf")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
