"""Command-line entry point.

Usage:
    nextpatch              # patch `next` with the active package manager
    python -m nextpatch    # same

This is the only place that turns a run outcome into a process exit
status: 0 on success, 1 on any failure.
"""

from __future__ import annotations

import logging

import structlog
from pydantic import ValidationError

from nextpatch.core.config import get_settings
from nextpatch.core.logging import configure_structlog
from nextpatch.orchestrator import run

logger = logging.getLogger(__name__)


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_structlog()
        logger.error("❌ Invalid NEXTPATCH_* settings:\n%s", exc)
        return 1

    configure_structlog(debug=settings.debug, json_logs=settings.json_logs)

    outcome = run(settings)

    log = structlog.get_logger("nextpatch")
    if outcome.is_success:
        log.info("patch_run_complete", **outcome.to_dict())
    else:
        log.error("patch_run_failed", **outcome.to_dict())

    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
