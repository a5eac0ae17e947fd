from schedsim.gantt import build_rich_gantt, render_gantt, render_waiting_history
from schedsim.models import GanttInterval, WaitingSample


def test_render_gantt_plain():
    out = render_gantt([
        GanttInterval("P1", 0, 5),
        GanttInterval("P2", 5, 8),
        GanttInterval("P3", 8, 10),
    ])
    assert out.splitlines() == [
        "Gantt Chart:",
        "|==========|",
        "P1   P2 P3",
        "0  5  8 10",
    ]


def test_render_gantt_idle_has_no_label():
    out = render_gantt([GanttInterval("idle", 0, 2), GanttInterval("P1", 2, 3)])
    lines = out.splitlines()
    assert lines[1] == "|..=|"
    assert lines[2] == "  P"
    assert lines[3] == "0  2  3"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"
    _, marks = build_rich_gantt([])
    assert marks == ""


def test_rich_gantt_time_marks():
    _, marks = build_rich_gantt([GanttInterval("idle", 0, 1), GanttInterval("P1", 1, 4)])
    assert marks == "0  1  4"


def test_render_waiting_history():
    lines = render_waiting_history([WaitingSample(0, 2), WaitingSample(1, 0)])
    assert lines == ["t=  0 ## 2", "t=  1    0"]
