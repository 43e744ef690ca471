"""
Logging configuration with a canonical run event.

Every pipeline run builds a single summary event (counts, endpoint, outcome)
and emits it once at the end, in the spirit of canonical log lines:
- Component loggers are bound with ``component=...`` for per-step detail
- ``run_id`` is bound through structlog contextvars for correlation
- The run event is assembled explicitly by the caller, never from globals

References:
- https://charity.wtf/2019/02/05/logs-vs-structured-events/
- Stripe's "canonical log lines" pattern
"""

import logging
import os
import sys
import time
import uuid
from typing import Any

import structlog
from structlog.types import Processor


def init_run_event(job: str, run_id: str | None = None) -> dict[str, Any]:
    """
    Start the canonical event for one pipeline run.

    Binds ``run_id`` into the structlog context so that every log line
    emitted during the run can be correlated with the final event.
    """
    run_id = run_id or str(uuid.uuid4())[:8]
    structlog.contextvars.bind_contextvars(run_id=run_id)
    return {
        "run_id": run_id,
        "job": job,
        "started_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "_start": time.monotonic(),
        "service": {
            "name": "hifld-pipeline",
            "version": os.environ.get("APP_VERSION", "dev"),
        },
    }


def finalize_run_event(
    event: dict[str, Any],
    outcome: str,
    error: Exception | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Close the run event with its outcome and the collected fields."""
    start = event.pop("_start", None)
    if start is not None:
        event["duration_ms"] = int((time.monotonic() - start) * 1000)
    event["outcome"] = outcome
    event.update(fields)

    if error:
        event["error"] = {
            "type": type(error).__name__,
            "message": str(error)[:500],  # Truncate long messages
        }
        if hasattr(error, "details"):
            event["error"]["details"] = error.details

    return event


def emit_run_event(event: dict[str, Any]) -> None:
    """
    Emit the canonical log line for a run.

    Failed runs log at error, partial runs at warning, everything else at info.
    """
    logger = structlog.get_logger("run_event")
    outcome = event.get("outcome")

    if outcome == "failed":
        logger.error("run_completed", **event)
    elif outcome == "partial":
        logger.warning("run_completed", **event)
    else:
        logger.info("run_completed", **event)

    structlog.contextvars.unbind_contextvars("run_id")


def configure_logging(json_logs: bool = True, log_level: str = "INFO") -> None:
    """
    Configure structlog for the pipeline.

    Args:
        json_logs: If True, output JSON format (for scheduled runs).
                   If False, output colored console format (for development).
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # httpx logs every request at INFO through stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
