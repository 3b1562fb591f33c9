"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
from pathlib import Path

from linear_mcp.logging import LOGGER_NAME, setup_logging


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def _file_handlers(logger: logging.Logger) -> list[logging.handlers.RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


class TestSetupLogging:
    def test_writes_json_lines(self, tmp_path: Path) -> None:
        log_path = tmp_path / "linear-mcp.log"
        logger = setup_logging(log_path)
        logger.info("tool_call", extra={"tool": "get-team-tasks", "args_data": {"teamId": "t1"}, "duration_ms": 4.2})
        _flush(logger)
        record = json.loads(log_path.read_text().strip().split("\n")[-1])
        assert record["msg"] == "tool_call"
        assert record["level"] == "INFO"
        assert record["tool"] == "get-team-tasks"
        assert record["args"]["teamId"] == "t1"
        assert record["duration_ms"] == 4.2

    def test_exception_recorded(self, tmp_path: Path) -> None:
        log_path = tmp_path / "linear-mcp.log"
        logger = setup_logging(log_path)
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.error("tool_error", exc_info=True)
        _flush(logger)
        record = json.loads(log_path.read_text().strip().split("\n")[-1])
        assert record["exception"] == "boom"

    def test_creates_parent_dir(self, tmp_path: Path) -> None:
        log_path = tmp_path / "nested" / "logs" / "server.log"
        setup_logging(log_path)
        assert log_path.parent.is_dir()

    def test_stderr_only_without_file(self) -> None:
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert not _file_handlers(logger)

    def test_idempotent_setup(self, tmp_path: Path) -> None:
        logger1 = setup_logging(tmp_path / "a.log")
        logger2 = setup_logging(tmp_path / "a.log")
        assert logger1 is logger2
        assert len(logger1.handlers) == 2

    def test_new_path_replaces_file_handler(self, tmp_path: Path) -> None:
        setup_logging(tmp_path / "a.log")
        logger = setup_logging(tmp_path / "b.log")
        handlers = _file_handlers(logger)
        assert [h.baseFilename for h in handlers] == [os.path.abspath(str(tmp_path / "b.log"))]

    def test_no_duplicate_handlers_under_concurrency(self, tmp_path: Path) -> None:
        """Concurrent setup_logging calls must not produce duplicate handlers."""
        import threading

        results: list[logging.Logger] = []
        barrier = threading.Barrier(4)

        def call_setup() -> None:
            barrier.wait()
            results.append(setup_logging(tmp_path / "c.log"))

        threads = [threading.Thread(target=call_setup) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 4
        assert all(r is results[0] for r in results)
        assert len(_file_handlers(results[0])) == 1

    def teardown_method(self) -> None:
        """Clean up the linear_mcp logger handlers between tests."""
        logger = logging.getLogger(LOGGER_NAME)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
