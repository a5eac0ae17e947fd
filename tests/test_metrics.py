import pytest

from schedsim.engine import Simulation
from schedsim.metrics import compute_metrics, count_context_switches
from schedsim.models import GanttInterval, Process


def _finished(processes, algorithm="fcfs", quantum=2):
    sim = Simulation.from_processes(processes, algorithm=algorithm, quantum=quantum)
    sim.run_to_completion()
    return sim


def test_not_ready_until_everything_finished():
    sim = Simulation.from_processes([Process("P1", 0, 1), Process("P2", 0, 3)])
    sim.advance_tick()
    assert sim.get_process("P1").finish == 1
    assert sim.compute_metrics() is None


def test_no_processes_is_not_ready():
    assert compute_metrics([], []) is None


def test_single_unit_process():
    m = _finished([Process("P1", 0, 1)]).compute_metrics()
    assert m.makespan == 1
    assert m.throughput == 1
    assert m.cpu_util == 1.0
    assert m.avg_wait == 0
    assert m.processes[0].finish == 1


def test_averages_for_fcfs_workload():
    m = _finished([Process("P1", 0, 5), Process("P2", 2, 3), Process("P3", 4, 2)]).compute_metrics()
    assert [r.waiting_time for r in m.processes] == [0, 3, 4]
    assert [r.turnaround_time for r in m.processes] == [5, 6, 6]
    assert m.avg_wait == pytest.approx(2.33, abs=0.01)
    assert m.avg_turnaround == pytest.approx(17 / 3)
    assert m.makespan == 10
    assert m.throughput == pytest.approx(0.3)
    assert m.cpu_util == 1.0
    assert m.context_switches == 2


def test_makespan_starts_at_earliest_arrival():
    m = _finished([Process("P1", 3, 2)]).compute_metrics()
    assert m.makespan == 2
    assert m.throughput == 0.5
    assert m.cpu_util == 1.0


def test_idle_time_lowers_utilisation():
    m = _finished([Process("P1", 0, 1), Process("P2", 3, 1)]).compute_metrics()
    assert m.makespan == 4
    assert m.cpu_util == 0.5
    assert m.cpu_busy_time == 2
    assert m.idle_time == 2
    assert m.context_switches == 1


def test_response_time_uses_first_dispatch():
    m = _finished([Process("P1", 0, 8), Process("P2", 1, 4)], algorithm="srtf").compute_metrics()
    rows = {r.pid: r for r in m.processes}
    assert rows["P1"].response_time == 0
    assert rows["P2"].response_time == 0
    assert rows["P1"].waiting_time == 4
    assert m.context_switches == 2


def test_context_switches_ignore_idle_gaps():
    gantt = [
        GanttInterval("P1", 0, 2),
        GanttInterval("idle", 2, 4),
        GanttInterval("P1", 4, 5),
        GanttInterval("P2", 5, 6),
    ]
    assert count_context_switches(gantt) == 1
