from __future__ import annotations

from typing import List, Optional, Sequence

from .models import GanttInterval, Process, ProcessMetrics, SimulationMetrics


def process_metrics(p: Process) -> ProcessMetrics:
    """
    Per-process figures for a finished process.
    """
    turnaround_time = p.finish - p.arrival
    return ProcessMetrics(
        pid=p.pid,
        arrival=p.arrival,
        burst=p.burst,
        start=p.start,
        finish=p.finish,
        waiting_time=turnaround_time - p.burst,
        turnaround_time=turnaround_time,
        response_time=p.start - p.arrival,
        priority=p.priority,
    )


def count_context_switches(gantt: Sequence[GanttInterval]) -> int:
    """
    Changes of running process between consecutive busy intervals. An idle
    gap between two runs of the same process is not a switch.
    """
    busy = [iv.pid for iv in gantt if not iv.is_idle]
    return sum(1 for prev, cur in zip(busy, busy[1:]) if prev != cur)


def compute_metrics(processes: Sequence[Process], gantt: Sequence[GanttInterval]) -> Optional[SimulationMetrics]:
    """
    Aggregate metrics once every process has finished; None otherwise.

    The makespan is measured from the earliest arrival of all processes, which
    is only meaningful when all of them are finished, hence the precondition.
    """
    if not processes or any(p.finish is None for p in processes):
        return None

    rows: List[ProcessMetrics] = [process_metrics(p) for p in processes]
    n = len(rows)

    makespan = max(p.finish for p in processes) - min(p.arrival for p in processes)
    span = makespan if makespan > 0 else 1
    busy = sum(p.burst for p in processes)
    cpu_busy_time = sum(iv.duration for iv in gantt if not iv.is_idle)
    idle_time = sum(iv.duration for iv in gantt if iv.is_idle)

    return SimulationMetrics(
        avg_wait=sum(r.waiting_time for r in rows) / n,
        avg_turnaround=sum(r.turnaround_time for r in rows) / n,
        avg_response=sum(r.response_time for r in rows) / n,
        makespan=makespan,
        throughput=n / span,
        cpu_util=busy / span,
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        context_switches=count_context_switches(gantt),
        processes=rows,
    )
