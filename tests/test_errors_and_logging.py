# tests/test_errors_and_logging.py
import logging

from circuitsim_core.errors import format_diagnostic_report
from circuitsim_core.log_config import PACKAGE_LOGGER_NAME, setup_logging


def test_report_layout():
    report = format_diagnostic_report(
        error_type="Component Error",
        details="first line\nsecond line",
        suggestion="Fix it.",
        context={'component_id': "R1", 'sim_time': "0.5 s", 'source_file': None},
    )
    assert "Error Type:     Component Error" in report
    assert "Component:      R1" in report
    assert "Sim Time:       0.5 s" in report
    assert "Source File" not in report
    assert "  first line\n  second line" in report
    assert "Suggestion:\n  Fix it." in report


def test_setup_logging_reads_environment(monkeypatch):
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    try:
        monkeypatch.setenv("CIRCUITSIM_LOG_LEVEL", "debug")
        setup_logging()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

        monkeypatch.setenv("CIRCUITSIM_LOG_LEVEL", "not-a-level")
        setup_logging()
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        monkeypatch.delenv("CIRCUITSIM_LOG_LEVEL", raising=False)
        setup_logging()
