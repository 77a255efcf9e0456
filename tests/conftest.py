"""Shared fixtures for the settings store tests."""

import json
import logging
import logging.handlers
import sys
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any logging configuration a test applied."""
    yield
    structlog.reset_defaults()
    # reset_defaults() does not unbind module-level loggers that were cached
    # while cache_logger_on_first_use was on; drop their cached bind too.
    for name, module in list(sys.modules.items()):
        if name.startswith("loadorder_settings"):
            proxy = getattr(module, "log", None)
            if isinstance(proxy, structlog._config.BoundLoggerLazyProxy):
                proxy.__dict__.pop("bind", None)
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler) or type(handler) is logging.StreamHandler:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.WARNING)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """An empty application data directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_document(tmp_path: Path):
    """Write a settings document and return its path."""
    def _write(data: object, name: str = "settings.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
