from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user config files out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


@pytest.fixture(autouse=True)
def quiet_logger():
    """Drop sinks the CLI installs so they don't outlive a test's captured stderr."""
    yield
    logger.remove()
    logger.disable("picklist")
