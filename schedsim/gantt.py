from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import GanttInterval, WaitingSample

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_gantt(intervals: Sequence[GanttInterval]) -> str:
    """
    Plain-text Gantt chart. Idle ticks are drawn as dots with no label.

    Used by the CLI when stdout is not a terminal.
    """
    if not intervals:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = f"{intervals[0].start}"

    for iv in intervals:
        width = max(1, iv.duration)
        if iv.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += iv.pid[:width].ljust(width)
        time_marks += f"{iv.end:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(intervals: Sequence[GanttInterval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not intervals:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(COLORS)
            pid_to_color[pid] = COLORS[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = f"{intervals[0].start}"

    for iv in intervals:
        width = max(1, iv.duration)
        if iv.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            timeline.append(" " * width, style=f"on {pid_color(iv.pid)}")
            labels.append(iv.pid[:width].ljust(width), style="bold")
        time_marks += f"{iv.end:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def render_waiting_history(samples: Sequence[WaitingSample]) -> List[str]:
    """
    One line per tick: the number of waiting processes as a bar.
    """
    width = max([1] + [s.waiting_count for s in samples])
    return [f"t={s.tick:>3} {('#' * s.waiting_count).ljust(width)} {s.waiting_count}" for s in samples]


def build_rich_waiting_chart(samples: Sequence[WaitingSample]) -> Panel:
    if not samples:
        return Panel("No samples", title="Waiting queue")
    text = Text("\n".join(render_waiting_history(samples)))
    return Panel.fit(text, title="Waiting queue")
