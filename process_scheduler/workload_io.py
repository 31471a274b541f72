from __future__ import annotations

import csv
import logging
from collections import Counter
from pathlib import Path
from typing import List, Sequence, TextIO

from .models import Process

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """Raised when a workload cannot be parsed or is unfit to schedule."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a headerless CSV workload file into a list of Process objects.

    Errors opening the file (``OSError``) propagate to the caller.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8", newline="") as f:
        return load_processes(f)


def load_processes(stream: TextIO) -> List[Process]:
    """
    Parse ``pid,burst,arrival[,priority]`` rows from a text stream.

    Every row must have the same number of fields as the first one (3 or 4),
    and every field must be an integer. Any violation aborts the whole load.
    """
    processes: List[Process] = []
    width = None

    try:
        rows = list(csv.reader(stream))
    except (csv.Error, UnicodeDecodeError) as exc:
        raise WorkloadError(f"Unreadable CSV: {exc}") from exc

    for lineno, row in enumerate(rows, start=1):
        if not row or all(not cell.strip() for cell in row):
            continue

        if width is None:
            width = len(row)
            if width not in (3, 4):
                raise WorkloadError(f"Row {lineno}: expected 3 or 4 fields, got {width}")
        elif len(row) != width:
            raise WorkloadError(f"Row {lineno}: wrong number of fields ({len(row)}, expected {width})")

        processes.append(_process_from_row(lineno, row))

    logger.info("Loaded %d processes", len(processes))
    return processes


def _process_from_row(lineno: int, row: List[str]) -> Process:
    try:
        values = [int(cell.strip()) for cell in row]
    except ValueError as exc:
        raise WorkloadError(f"Row {lineno}: non-integer field in {row!r}") from exc

    pid, burst_time, arrival_time = values[:3]
    priority = values[3] if len(values) == 4 else 0

    return Process(
        pid=pid,
        burst_time=burst_time,
        arrival_time=arrival_time,
        priority=priority,
    )


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Check the semantic preconditions every policy relies on.

    Duplicate pids are allowed (the input order still identifies each row)
    but are reported as a warning.
    """
    if not processes:
        raise WorkloadError("Workload contains no processes")

    for p in processes:
        if p.burst_time <= 0:
            raise WorkloadError(f"Process {p.pid}: burst time must be positive (got {p.burst_time})")
        if p.arrival_time < 0:
            raise WorkloadError(f"Process {p.pid}: arrival time must not be negative (got {p.arrival_time})")

    duplicates = sorted(pid for pid, n in Counter(p.pid for p in processes).items() if n > 1)
    if duplicates:
        logger.warning("Duplicate process ids in workload: %s", ", ".join(map(str, duplicates)))
