from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import run_all
from .config import get_settings
from .gantt import render_report
from .workload_io import WorkloadError, load_workload, validate_processes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-scheduler",
        description=(
            "CPU scheduling simulator. Runs FCFS, SJF, Priority and Round Robin "
            "on a CSV workload (pid,burst,arrival[,priority]) and prints a Gantt "
            "chart and schedule table for each."
        ),
    )
    parser.add_argument("workload", help="Path to the CSV workload file.")
    return parser


def _configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = get_settings()
    except ValidationError as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        return 1

    _configure_logging(settings.LOG_LEVEL, err_console)

    workload_path = Path(args.workload)
    try:
        processes = load_workload(workload_path)
        validate_processes(processes)
    except OSError as exc:
        reason = escape(exc.strerror or str(exc))
        err_console.print(f"[red]Cannot open workload {escape(str(workload_path))}:[/red] {reason}")
        return 1
    except WorkloadError as exc:
        err_console.print(f"[red]Invalid workload {escape(str(workload_path))}:[/red] {escape(str(exc))}")
        return 1

    logger.debug("Scheduling %d processes from %s", len(processes), workload_path)

    for result in run_all(processes):
        render_report(console, result, cell_width=settings.GANTT_CELL_WIDTH)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
