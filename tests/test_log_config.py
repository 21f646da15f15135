# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from pyonu.config.log_config import LoggerConfigurator
from pyonu.lib.types import FileNameStr


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_file_handler_writes_banner(tmp_path: Path) -> None:
    """
    Verify The Log Directory Is Created And The Startup Banner Is Written.
    """
    log_dir = tmp_path / "logs"

    cfg = LoggerConfigurator(log_dir, FileNameStr("pyonu.log"), level="debug")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert cfg.log_file == log_dir / "pyonu.log"
    assert logging.getLogger().level == logging.DEBUG
    assert "==== PyONU OMCI Responder Starting ====" in cfg.log_file.read_text()


def test_rotate_uses_rotating_handler(tmp_path: Path) -> None:
    LoggerConfigurator(tmp_path, FileNameStr("pyonu.log"), rotate=True)

    assert any(isinstance(h, RotatingFileHandler) for h in logging.getLogger().handlers)


def test_unknown_level_falls_back_to_info(tmp_path: Path) -> None:
    LoggerConfigurator(tmp_path, FileNameStr("pyonu.log"), level="chatty", to_console=True)

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert any(type(h) is logging.StreamHandler for h in root.handlers)
