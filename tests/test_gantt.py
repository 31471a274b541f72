import io

from rich.console import Console
from rich.panel import Panel

from process_scheduler.algorithms import schedule_fcfs
from process_scheduler.gantt import build_rich_gantt, build_schedule_table, render_gantt, render_report
from process_scheduler.models import Process, ScenarioMetrics, ScheduleResult, TimeSlice


def _convoy():
    return [
        Process(1, burst_time=24, arrival_time=0),
        Process(2, burst_time=3, arrival_time=0),
        Process(3, burst_time=3, arrival_time=0),
    ]


def _render(result) -> str:
    buf = io.StringIO()
    render_report(Console(file=buf, width=120), result)
    return buf.getvalue()


def test_render_gantt_plain():
    text = render_gantt([TimeSlice(1, 0, 24), TimeSlice(2, 24, 27), TimeSlice(3, 27, 30)])
    header, bar, marks = text.split("\n")
    assert header == "Gantt schedule"
    cells = bar.split("|")[1:-1]
    assert [c.strip() for c in cells] == ["1", "2", "3"]
    assert all(len(c) == 8 for c in cells)
    assert marks.split("\t") == ["0", "24", "27", "30"]


def test_render_gantt_cell_width():
    text = render_gantt([TimeSlice(12, 0, 1)], cell_width=4)
    assert text.split("\n")[1] == "| 12 |"


def test_render_gantt_empty():
    assert "no execution" in render_gantt([])


def test_build_rich_gantt_matches_plain_cells():
    slices = [TimeSlice(1, 0, 2), TimeSlice(2, 4, 5)]
    panel, marks = build_rich_gantt(slices)
    assert isinstance(panel, Panel)

    bar, mark_line = panel.renderable.renderables
    assert bar.plain == render_gantt(slices).split("\n")[1]
    assert mark_line.plain == marks
    # each mark sits under the left border of its cell, the last under the closing one
    assert [bar.plain.index("|", 9 * i) for i in range(3)] == [0, 9, 18]
    assert [marks.index(t) for t in ("0", "4", "5")] == [0, 9, 18]

    panel, marks = build_rich_gantt([])
    assert marks == ""


def test_build_rich_gantt_cell_width():
    _, marks = build_rich_gantt([TimeSlice(12, 0, 3)], cell_width=4)
    assert marks == "0    3"


def test_schedule_table_rows():
    table = build_schedule_table(schedule_fcfs(_convoy()))
    assert table.row_count == 3
    assert [c.header for c in table.columns] == [
        "ID",
        "Priority",
        "Burst",
        "Arrival",
        "Wait",
        "Turnaround",
        "Exit",
    ]


def test_render_report_contains_values():
    out = _render(schedule_fcfs(_convoy()))
    assert "First-come, first-serve" in out
    assert "Gantt schedule" in out
    assert "17.00" in out
    assert "27.00" in out
    assert "0.10/t" in out


def test_render_report_unavailable_throughput():
    result = ScheduleResult(
        algorithm="Degenerate",
        quantum=None,
        metrics=ScenarioMetrics(average_wait=0.0, average_turnaround=0.0, last_completion=0),
    )
    out = _render(result)
    assert "n/a" in out


def test_render_report_on_terminal_uses_colored_chart():
    buf = io.StringIO()
    console = Console(file=buf, width=120, force_terminal=True)
    render_report(console, schedule_fcfs(_convoy()))
    out = buf.getvalue()
    assert "Gantt schedule" in out
    assert "0        24       27       30" in out
