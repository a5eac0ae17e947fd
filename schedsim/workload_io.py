from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import ValidationError
from .models import Process

SAMPLE_WORKLOAD = [
    Process("P1", arrival=0, burst=5, priority=1),
    Process("P2", arrival=2, burst=3, priority=2),
    Process("P3", arrival=4, burst=2, priority=1),
]


def sample_workload() -> List[Process]:
    return [Process(p.pid, p.arrival, p.burst, p.priority) for p in SAMPLE_WORKLOAD]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Values are converted here; range checks (positive burst, unique pids, ...)
    happen when the processes are added to a simulation.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValidationError(f"unsupported workload format {suffix!r} (use .json or .csv)", field="workload")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{path} is not valid JSON: {exc}", field="workload") from exc
        except UnicodeDecodeError as exc:
            raise ValidationError(f"{path} is not UTF-8 text", field="workload") from exc

    if not isinstance(raw, list):
        raise ValidationError("JSON workload must be a list of process objects", field="workload")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            return [_process_from_mapping(row) for row in reader]
        except UnicodeDecodeError as exc:
            raise ValidationError(f"{path} is not UTF-8 text", field="workload") from exc


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival = int(mapping["arrival_time"])
        burst = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"invalid process entry: {mapping!r}", field="workload") from exc

    return Process(pid=pid, arrival=arrival, burst=burst, priority=priority)
