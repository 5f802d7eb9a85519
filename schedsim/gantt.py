from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

PALETTE = ["cyan", "magenta", "green", "yellow", "blue", "red"]


def merge_slices(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    """
    Sort slices by start time and join back-to-back slices of the same pid
    (Round Robin re-running a lone process).
    """
    merged: List[ScheduledSlice] = []
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        last = merged[-1] if merged else None
        if last is not None and last.pid == sl.pid and last.end_time == sl.start_time:
            merged[-1] = ScheduledSlice(pid=last.pid, start_time=last.start_time, end_time=sl.end_time)
        else:
            merged.append(ScheduledSlice(pid=sl.pid, start_time=sl.start_time, end_time=sl.end_time))
    return merged


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel with one colored bar per slice, and a line of time marks.
    Idle gaps are left blank.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    colors: Dict[str, str] = {}
    bars = Text()
    labels = Text()
    marks = ["0"]
    clock = 0

    for sl in merge_slices(slices):
        if sl.start_time > clock:
            gap = sl.start_time - clock
            bars.append(" " * gap)
            labels.append(" " * gap)
            marks.append(f"{sl.start_time:>3}")

        width = sl.end_time - sl.start_time
        color = colors.setdefault(sl.pid, PALETTE[len(colors) % len(PALETTE)])
        bars.append(" " * width, style=f"on {color}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

        clock = sl.end_time
        marks.append(f"{clock:>3}")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bars)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), "".join(marks)
