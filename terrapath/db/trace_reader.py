"""Read search trace logs back into records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

from terrapath.engine.contracts import SearchSummary, StepRecord


def read_step_records(path: Path) -> Iterator[StepRecord]:
    for payload in _payloads(path, "step"):
        yield StepRecord.model_validate(payload)


def read_summary(path: Path) -> SearchSummary | None:
    summary = None
    for payload in _payloads(path, "summary"):
        summary = SearchSummary.model_validate(payload)
    return summary


def _payloads(path: Path, record_type: str) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if not record:
                continue
            if record.get("type") != record_type:
                continue
            payload = record.get("payload")
            if payload is None:
                continue
            yield payload


def _parse_record(line: str) -> dict | None:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None
