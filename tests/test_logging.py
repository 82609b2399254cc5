"""Tests for logging initialization."""

from __future__ import annotations

from loguru import logger

from infrastructure.logging import find_latest_log_file, init_logging


def test_init_logging_writes_file(tmp_path) -> None:
    log_dir = tmp_path / "logs"
    init_logging(log_dir, level="DEBUG")
    logger.info("hello journal")
    logger.remove()

    latest = find_latest_log_file(log_dir)

    assert latest is not None
    assert "hello journal" in latest.read_text(encoding="utf-8")


def test_find_latest_log_file_missing_dir(tmp_path) -> None:
    assert find_latest_log_file(tmp_path / "absent") is None
