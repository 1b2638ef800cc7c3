# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_monocloud

import logging
import os
import sys
from typing import Any

from loguru import logger
from opentelemetry import trace

__all__ = ["logger", "configure_logging"]

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """
    Redirects standard logging messages to Loguru.
    Host frameworks registering providers usually log through `logging`.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno  # type: ignore[assignment]

        # Find caller from where originated the logged message
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename in (logging.__file__, __file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_injector(record: dict[str, Any]) -> None:
    """
    Injects OpenTelemetry trace_id and span_id into the log record.
    Used as a patcher for Loguru.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        record["extra"]["trace_id"] = format(ctx.trace_id, "032x")
        record["extra"]["span_id"] = format(ctx.span_id, "016x")


def configure_logging() -> None:
    """
    Configures the logger based on environment variables.
    Call this to reload configuration if env vars change.

    Environment:
        COREASON_LOG_LEVEL: Minimum level, INFO when unset or invalid.
        COREASON_LOG_JSON: "true" switches the console sink to JSON on stdout.
        COREASON_LOG_FILE: Optional path of a rotating JSON file sink.
    """
    log_level = os.getenv("COREASON_LOG_LEVEL", "INFO").upper()
    log_json = os.getenv("COREASON_LOG_JSON", "false").lower() == "true"
    log_file = os.getenv("COREASON_LOG_FILE")

    try:
        logger.level(log_level)
    except ValueError:
        log_level = "INFO"

    # Drops any previously added handlers and sets the patcher in one go
    logger.configure(handlers=[], patcher=trace_id_injector)  # type: ignore[arg-type]

    if log_json:
        logger.add(sys.stdout, level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT)

    # File logging is opt-in: registering a provider must not touch the filesystem
    if log_file:
        try:
            logger.add(
                log_file,
                rotation="500 MB",
                retention="10 days",
                serialize=True,
                enqueue=True,
                level=log_level,
            )
        except (PermissionError, OSError) as e:
            logger.warning(f"File logging disabled, cannot write to {log_file}: {e}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    numeric_level = logging.getLevelName(log_level)
    logging.getLogger().setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)


# Initialize on import
configure_logging()
