from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .models import IDLE, Algorithm, GanttInterval, Process

if TYPE_CHECKING:
    from .engine import Simulation

logger = logging.getLogger(__name__)

StepPolicy = Callable[["Simulation", List[Process]], None]


def tie_break_key(p: Process):
    """Secondary ordering shared by every policy: earlier arrival, then PID."""
    return (p.arrival, p.pid)


def _pick(ready: List[Process], primary: Callable[[Process], int]) -> Process:
    return min(ready, key=lambda p: (primary(p),) + tie_break_key(p))


def record_gantt(sim: Simulation, pid: str) -> None:
    """
    Extend the last interval when the same pid ran the previous tick,
    otherwise open a new one-tick interval.
    """
    t = sim.sim_time
    if sim.gantt and sim.gantt[-1].pid == pid and sim.gantt[-1].end == t:
        sim.gantt[-1].end = t + 1
    else:
        sim.gantt.append(GanttInterval(pid=pid, start=t, end=t + 1))


def run_idle(sim: Simulation) -> None:
    record_gantt(sim, IDLE)
    sim.running_pid = None


def run_process(sim: Simulation, process: Process) -> bool:
    """
    Give ``process`` the CPU for the current tick. Returns True when this
    tick completed it.
    """
    t = sim.sim_time
    previous = sim.running_pid
    if previous is not None and previous != process.pid:
        logger.debug("t=%d: switch %s -> %s", t, previous, process.pid)

    record_gantt(sim, process.pid)
    if process.start is None:
        process.start = t
        logger.debug("t=%d: %s starts", t, process.pid)

    process.remaining -= 1
    if process.remaining == 0:
        process.finish = t + 1
        sim.running_pid = None
        logger.debug("t=%d: %s finished (turnaround=%d)", t, process.pid, process.finish - process.arrival)
        return True

    sim.running_pid = process.pid
    return False


def step_fcfs(sim: Simulation, ready: List[Process]) -> None:
    """
    First-Come First-Serve. Re-picked every tick; the earliest arrival keeps
    winning, so a started process runs to completion.
    """
    if not ready:
        run_idle(sim)
        return
    run_process(sim, min(ready, key=tie_break_key))


def step_sjf(sim: Simulation, ready: List[Process]) -> None:
    """
    Shortest Job First (non-preemptive).

    A process that is mid-burst keeps the CPU until it finishes, even if a
    shorter job arrives meanwhile. Otherwise choose the smallest total burst.
    """
    current = sim.running_process()
    if current is None:
        if not ready:
            run_idle(sim)
            return
        current = _pick(ready, lambda p: p.burst)
    run_process(sim, current)


def step_srtf(sim: Simulation, ready: List[Process]) -> None:
    """
    Shortest Remaining Time First (preemptive SJF), re-evaluated every tick.
    """
    if not ready:
        run_idle(sim)
        return
    run_process(sim, _pick(ready, lambda p: p.remaining))


def step_priority(sim: Simulation, ready: List[Process]) -> None:
    """
    Static priority. Lower numeric value means more urgent.
    """
    if not ready:
        run_idle(sim)
        return
    run_process(sim, _pick(ready, lambda p: p.priority))


def _queued_process(sim: Simulation, pid: str) -> Optional[Process]:
    if pid not in sim.registry:
        return None
    process = sim.registry.get(pid)
    return None if process.is_finished else process


def step_round_robin(sim: Simulation, ready: List[Process]) -> None:
    """
    Round Robin over a cycling queue of pids.

    The process under the cursor runs for up to ``quantum`` consecutive ticks
    or until it finishes; then the cursor moves on. New arrivals join the tail
    in arrival/PID order on the tick they become eligible.
    """
    rr = sim.rr

    for p in sorted(ready, key=tie_break_key):
        if p.pid not in rr.queue:
            rr.queue.append(p.pid)

    if not rr.queue:
        run_idle(sim)
        return

    if rr.cursor >= len(rr.queue):
        rr.cursor = 0

    current = _queued_process(sim, rr.queue[rr.cursor])
    if current is None:
        # Finished (or removed) since it was queued.
        del rr.queue[rr.cursor]
        rr.used = 0
        if not rr.queue:
            run_idle(sim)
            return
        rr.cursor %= len(rr.queue)
        current = sim.registry.get(rr.queue[rr.cursor])

    finished = run_process(sim, current)
    rr.used += 1

    if finished:
        del rr.queue[rr.cursor]
        rr.used = 0
        if rr.cursor >= len(rr.queue):
            rr.cursor = 0
    elif rr.used >= sim.quantum:
        rr.cursor = (rr.cursor + 1) % len(rr.queue)
        rr.used = 0
        logger.debug("t=%d: quantum expired for %s", sim.sim_time, current.pid)


STEP_POLICIES: Dict[Algorithm, StepPolicy] = {
    Algorithm.FCFS: step_fcfs,
    Algorithm.SJF: step_sjf,
    Algorithm.SRTF: step_srtf,
    Algorithm.ROUND_ROBIN: step_round_robin,
    Algorithm.PRIORITY: step_priority,
}


def run_step(sim: Simulation, ready: List[Process]) -> None:
    """
    Dispatch one tick to the policy of the simulation's active algorithm.
    """
    STEP_POLICIES[sim.algorithm](sim, ready)
