"""Search trace logging helpers (JSONL)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from terrapath.engine.contracts import SearchSummary, StepRecord

SCHEMA_VERSION = 1
TRACE_LOG_NAME = "trace.jsonl"

logger = logging.getLogger(__name__)


def create_run_folder(
    base_dir: Path, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    run_id = timestamp or _format_timestamp(datetime.now(timezone.utc))
    run_dir = base_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("trace folder %s", run_dir)
    return run_dir, run_dir / TRACE_LOG_NAME


def write_header(path: Path, metadata: dict[str, Any]) -> None:
    record: dict[str, Any] = {
        "type": "header",
        "schema_version": SCHEMA_VERSION,
        "metadata": metadata,
    }
    _append_record(path, record)


def append_step(path: Path, step: StepRecord) -> None:
    record: dict[str, Any] = {
        "type": "step",
        "schema_version": SCHEMA_VERSION,
        "payload": step.model_dump(mode="json"),
    }
    _append_record(path, record)


def append_summary(path: Path, summary: SearchSummary) -> None:
    record: dict[str, Any] = {
        "type": "summary",
        "schema_version": SCHEMA_VERSION,
        "payload": summary.model_dump(mode="json"),
    }
    _append_record(path, record)


def _append_record(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")
