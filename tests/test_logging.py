"""Tests for structured logging and timing."""
import json
import logging
from tzlookup.utils.logging import LOGGER_NAME, log_structured
from tzlookup.utils.timing import Timer


def test_log_structured_json(caplog):
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        log_structured("debug", "Spiral search exhausted", probes=80)
    
    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["message"] == "Spiral search exhausted"
    assert entry["level"] == "DEBUG"
    assert entry["probes"] == 80
    assert "timestamp" in entry


def test_log_structured_respects_level(caplog):
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        log_structured("debug", "hidden")
    
    assert not [r for r in caplog.records if "hidden" in r.getMessage()]


def test_timer(caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        with Timer("resolve_csv", rows=3) as timer:
            pass
    
    assert timer.elapsed >= 0
    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["operation"] == "resolve_csv"
    assert entry["rows"] == 3
