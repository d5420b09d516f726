# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly
  - extra context fields get merged into the JSON
  - secrets passed as extra stay masked
"""

import json
import logging
from pathlib import Path

import pytest
from pydantic import SecretStr

from buildvariant.logging.logger import get_logger
from buildvariant.runtime.bootstrap import apply_log_level


@pytest.fixture(autouse=True)
def _reset_loggers() -> None:
    """
    Clear test logger handlers between tests so get_logger's handler guard
    doesn't interfere with test isolation.
    """
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("buildvariant.test"):
            logger = logging.getLogger(name)
            logger.handlers.clear()


class TestJsonOutput:
    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("buildvariant.test.fields", log_level="INFO")
        logger.info("test message")
        parsed = json.loads(capsys.readouterr().out.strip())

        assert parsed["level"] == "INFO"
        assert parsed["module"] == "buildvariant.test.fields"
        assert parsed["msg"] == "test message"
        assert "ts" in parsed

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("buildvariant.test.extra", log_level="DEBUG")
        logger.warning("fallback", extra={"variant": "release", "signing_source": "debug_fallback"})
        parsed = json.loads(capsys.readouterr().out.strip())

        assert parsed["variant"] == "release"
        assert parsed["signing_source"] == "debug_fallback"

    def test_secret_values_are_masked(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("buildvariant.test.secret", log_level="INFO")
        logger.info("credentials", extra={"store_password": SecretStr("hunter2")})
        out = capsys.readouterr().out

        assert "hunter2" not in out
        assert json.loads(out.strip())["store_password"] == "**********"

    def test_exception_is_serialized(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("buildvariant.test.exc", log_level="INFO")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.error("failed", exc_info=True)
        parsed = json.loads(capsys.readouterr().out.strip())

        assert "RuntimeError: boom" in parsed["exc"]


class TestLogLevelFiltering:
    def test_debug_messages_hidden_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("buildvariant.test.level_filter", log_level="INFO")
        logger.debug("this should not appear")
        assert capsys.readouterr().out.strip() == ""

    def test_second_call_updates_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        get_logger("buildvariant.test.relevel", log_level="INFO")
        logger = get_logger("buildvariant.test.relevel", log_level="DEBUG")
        logger.debug("now visible")
        assert "now visible" in capsys.readouterr().out
        assert len(logger.handlers) == 1

    def test_apply_log_level_reaches_existing_loggers(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("buildvariant.test.bootstrap_level", log_level="INFO")
        apply_log_level("ERROR")
        logger.warning("suppressed")
        assert capsys.readouterr().out.strip() == ""
        apply_log_level("INFO")


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "build.log"
        logger = get_logger("buildvariant.test.file_output", log_level="INFO", log_file=log_file)
        logger.info("file log test")

        parsed = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert parsed["msg"] == "file log test"

    def test_existing_logger_gains_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "build.log"
        get_logger("buildvariant.test.late_file", log_level="INFO")
        logger = get_logger("buildvariant.test.late_file", log_level="INFO", log_file=log_file)
        get_logger("buildvariant.test.late_file", log_level="INFO", log_file=log_file)
        logger.warning("fallback", extra={"signing_source": "debug_fallback"})

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["signing_source"] == "debug_fallback"
        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.close()


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("buildvariant.test.invalid", log_level="INVALID")
