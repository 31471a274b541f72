from __future__ import annotations

from typing import Dict, List

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .metrics import summarize
from .models import ScheduleResult, TimeSlice


def _time_marks(slices: List[TimeSlice]) -> List[int]:
    """Start of every slice, then the stop of the last one."""
    return [sl.start_time for sl in slices] + [slices[-1].end_time]


def render_gantt(slices: List[TimeSlice], cell_width: int = 8) -> str:
    """
    Plain-text Gantt chart: one fixed-width cell per slice, followed by the
    start time of every slice and the stop time of the last one.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    bar = "|" + "".join(str(sl.pid).center(cell_width) + "|" for sl in slices)
    marks = "\t".join(str(t) for t in _time_marks(slices))

    return "\n".join(["Gantt schedule", bar, marks])


def build_rich_gantt(slices: List[TimeSlice], cell_width: int = 8) -> tuple[Panel, str]:
    """
    Colored version of ``render_gantt``: the same cells, each shaded by pid,
    and time marks aligned under the cell borders.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = colors[len(pid_to_color) % len(colors)]
        return pid_to_color[pid]

    bar = Text("|")
    for sl in slices:
        bar.append(str(sl.pid).center(cell_width), style=f"bold on {pid_color(sl.pid)}")
        bar.append("|")

    *starts, stop = _time_marks(slices)
    time_marks = "".join(str(t).ljust(cell_width + 1) for t in starts) + str(stop)

    panel = Panel.fit(Group(bar, Text(time_marks)), title="Gantt schedule")
    return panel, time_marks



def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process detail table with the scenario averages in the footer.
    """
    summary = summarize(result.metrics)

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    table.add_column("ID", justify="center")
    table.add_column("Priority", justify="center")
    table.add_column("Burst", justify="right")
    table.add_column("Arrival", justify="right")
    table.add_column("Wait", justify="right", footer=f"Average\n{summary['avg_waiting']}")
    table.add_column("Turnaround", justify="right", footer=f"Average\n{summary['avg_turnaround']}")
    table.add_column("Exit", justify="right", footer=f"Throughput\n{summary['throughput']}")

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def render_report(console: Console, result: ScheduleResult, cell_width: int = 8) -> None:
    """
    Print the title banner, Gantt chart and schedule table for one policy.

    Terminals get the colored chart; redirected output gets the plain one.
    """
    console.rule(f"[bold]{result.algorithm}[/bold]")

    if console.is_terminal:
        panel, _ = build_rich_gantt(result.timeline, cell_width=cell_width)
        console.print(panel)
    else:
        console.print(
            render_gantt(result.timeline, cell_width=cell_width),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    console.print()
    console.print(build_schedule_table(result))
    console.print()
