import logging

import pytest


@pytest.fixture(autouse=True)
def reset_uniqr_logger():
    """
    Drops the handlers attached by config_logging so that every test
    binds its own (captured) stderr.
    """
    yield
    logger = logging.getLogger("Uniqr")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keeps the user's own config files out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("UNIQR_CONFIG", raising=False)
    return home
