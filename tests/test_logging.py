"""Tests for fedoractl.core.logging module."""

from __future__ import annotations

import logging

import pytest

from fedoractl.core.logging import LogContext, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_quiet_silences_httpx(self):
        setup_logging(quiet=True)
        assert logging.getLogger("httpx").level == logging.WARNING


class TestLogContext:
    """Tests for LogContext."""

    def test_logs_start_and_completion(self, caplog):
        logger = get_logger("fedoractl.tests")
        with caplog.at_level(logging.INFO, logger="fedoractl.tests"):
            with LogContext("add datastream", logger, pid="demo:1", dsid="OBJ"):
                pass

        assert "Starting add datastream (pid=demo:1, dsid=OBJ)" in caplog.text
        assert "add datastream completed" in caplog.text

    def test_logs_failure_and_reraises(self, caplog):
        logger = get_logger("fedoractl.tests")
        with caplog.at_level(logging.INFO, logger="fedoractl.tests"):
            with pytest.raises(ValueError):
                with LogContext("purge object", logger, pid="demo:1"):
                    raise ValueError("boom")

        failures = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(failures) == 1
        assert "purge object failed" in failures[0].getMessage()

    def test_context_fields_appended(self, caplog):
        logger = get_logger("fedoractl.tests")
        with caplog.at_level(logging.DEBUG, logger="fedoractl.tests"):
            with LogContext("ingest", logger, pid="new") as ctx:
                ctx.warning("retrying %s", "once")

        assert "[ingest] retrying once (pid=new)" in caplog.text

    def test_unset_fields_omitted(self, caplog):
        logger = get_logger("fedoractl.tests")
        with caplog.at_level(logging.INFO, logger="fedoractl.tests"):
            with LogContext("modify datastream", logger, pid="demo:1", dsid=None):
                pass

        assert "Starting modify datastream (pid=demo:1)" in caplog.text
