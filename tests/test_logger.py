# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_monocloud

import json
import logging
import os
import threading
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from loguru import logger
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags, use_span

from coreason_monocloud.provider import monocloud
from coreason_monocloud.utils.logger import configure_logging, trace_id_injector


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restores the default sinks once the test's environment patches are undone."""
    yield
    configure_logging()


def test_json_toggle(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify COREASON_LOG_JSON=true switches to stdout and uses JSON."""
    with patch.dict(os.environ, {"COREASON_LOG_JSON": "true", "COREASON_LOG_LEVEL": "INFO"}):
        configure_logging()
        logger.info("JSON Message")

        captured = capsys.readouterr()
        assert captured.err == ""
        log_record = json.loads(captured.out)
        assert log_record["record"]["message"] == "JSON Message"
        assert log_record["record"]["level"]["name"] == "INFO"


def test_invalid_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify invalid log level defaults to INFO."""
    with patch.dict(os.environ, {"COREASON_LOG_LEVEL": "INVALID_LEVEL_XYZ"}):
        configure_logging()
        logger.info("Info message")
        logger.debug("Debug message")

        captured = capsys.readouterr()
        assert "Info message" in captured.err
        assert "Debug message" not in captured.err


def test_reconfiguration_resilience(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify calling configure_logging multiple times doesn't duplicate logs."""
    configure_logging()
    configure_logging()
    configure_logging()

    logger.info("Single message")

    captured = capsys.readouterr()
    assert captured.err.count("Single message") == 1


def test_debug_logs_descriptor_creation(capsys: pytest.CaptureFixture[str], options: dict[str, Any]) -> None:
    """Verify descriptor creation is logged at DEBUG without leaking options."""
    with patch.dict(os.environ, {"COREASON_LOG_LEVEL": "DEBUG"}):
        configure_logging()
        monocloud(options)

        captured = capsys.readouterr()
        assert "Created MonoCloud provider descriptor" in captured.err
        assert "https://issuer.example" not in captured.err


def test_standard_logging_intercepted(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify records sent through the standard logging module reach Loguru."""
    configure_logging()
    logging.getLogger("host.framework").warning("Provider list loaded")

    captured = capsys.readouterr()
    assert "Provider list loaded" in captured.err
    assert "WARNING" in captured.err


def test_file_sink_opt_in(tmp_path: Path) -> None:
    """Verify COREASON_LOG_FILE adds a JSON file sink."""
    log_file = tmp_path / "monocloud.log"
    with patch.dict(os.environ, {"COREASON_LOG_FILE": str(log_file)}):
        configure_logging()
        logger.info("To file")
        logger.complete()

    configure_logging()
    lines = log_file.read_text().splitlines()
    assert json.loads(lines[-1])["record"]["message"] == "To file"


def test_no_file_sink_by_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify nothing is written to disk unless a log file is configured."""
    monkeypatch.chdir(tmp_path)
    configure_logging()
    logger.info("Console only")

    assert list(tmp_path.iterdir()) == []


def test_trace_id_injection() -> None:
    """Verify trace and span ids of the active span are added to the record."""
    ctx = SpanContext(trace_id=0x1234, span_id=0x56, is_remote=False, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    record: dict[str, Any] = {"extra": {}}

    with use_span(NonRecordingSpan(ctx)):
        trace_id_injector(record)

    assert record["extra"]["trace_id"] == format(0x1234, "032x")
    assert record["extra"]["span_id"] == format(0x56, "016x")


def test_trace_id_injection_without_span() -> None:
    record: dict[str, Any] = {"extra": {}}
    trace_id_injector(record)
    assert record["extra"] == {}


def test_concurrency_stress() -> None:
    """Verify logging is thread-safe under load."""
    configure_logging()

    def log_worker() -> None:
        for i in range(100):
            logger.info(f"Worker thread {threading.get_ident()} iteration {i}")

    threads = [threading.Thread(target=log_worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
