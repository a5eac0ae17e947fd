from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .algorithms import run_step
from .errors import IllegalStateError
from .metrics import compute_metrics
from .models import (
    Algorithm,
    GanttInterval,
    Process,
    ProcessStatus,
    RoundRobinState,
    SimulationConfig,
    SimulationMetrics,
    WaitingSample,
)
from .registry import ProcessRegistry

logger = logging.getLogger(__name__)


class Simulation:
    """
    All state of one simulation run: the process registry, the clock, the
    Gantt and waiting-history logs, the running marker and the Round Robin
    queue. Step policies receive this object and mutate it; nothing lives in
    module globals, so pausing is just not calling ``advance_tick``.
    """

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.config.validate()
        self.registry = ProcessRegistry()
        self.sim_time = 0
        self.gantt: List[GanttInterval] = []
        self.waiting_history: List[WaitingSample] = []
        self.running_pid: Optional[str] = None
        self.rr = RoundRobinState()

    @classmethod
    def from_processes(
        cls,
        processes: Iterable[Process],
        algorithm: str | Algorithm = Algorithm.FCFS,
        quantum: int = 2,
    ) -> Simulation:
        """
        Build a fresh simulation from process definitions. Only the definition
        fields are read, so the same list can seed several simulations.
        """
        sim = cls(SimulationConfig(algorithm=Algorithm.parse(algorithm), quantum=quantum))
        for p in processes:
            sim.add_process(p.pid, p.arrival, p.burst, p.priority)
        return sim

    # configuration

    @property
    def algorithm(self) -> Algorithm:
        return self.config.algorithm

    @algorithm.setter
    def algorithm(self, value: str | Algorithm) -> None:
        algorithm = Algorithm.parse(value)
        if algorithm is not self.config.algorithm:
            self.config.algorithm = algorithm
            self.rr = RoundRobinState()
            logger.debug("Algorithm set to %s", algorithm.value)

    @property
    def quantum(self) -> int:
        return self.config.quantum

    @quantum.setter
    def quantum(self, value: int) -> None:
        SimulationConfig(algorithm=self.config.algorithm, quantum=value).validate()
        self.config.quantum = value

    # process registry

    @property
    def processes(self) -> List[Process]:
        return list(self.registry)

    def add_process(self, pid: str, arrival: int, burst: int, priority: int = 0) -> Process:
        return self.registry.add(pid, arrival, burst, priority)

    def remove_process(self, pid: str) -> Process:
        if self.in_progress:
            raise IllegalStateError(f"Cannot remove {pid!r} while a simulation is running; reset first")
        return self.registry.remove(pid)

    def get_process(self, pid: str) -> Process:
        return self.registry.get(pid)

    def reset(self) -> None:
        self.registry.restore_all()
        self.sim_time = 0
        self.gantt = []
        self.waiting_history = []
        self.running_pid = None
        self.rr = RoundRobinState()
        logger.info("Simulation reset (%d processes, %s)", len(self.registry), self.algorithm.value)

    # state queries

    @property
    def is_finished(self) -> bool:
        return self.registry.all_finished()

    @property
    def in_progress(self) -> bool:
        return self.sim_time > 0 and not self.is_finished

    def ready_set(self) -> List[Process]:
        return [p for p in self.registry if p.arrival <= self.sim_time and p.remaining > 0]

    def running_process(self) -> Optional[Process]:
        """
        The process marked as running, if it is still registered and has work left.
        """
        if self.running_pid is None or self.running_pid not in self.registry:
            return None
        process = self.registry.get(self.running_pid)
        return None if process.is_finished else process

    def status_of(self, process: Process) -> ProcessStatus:
        if process.is_finished:
            return ProcessStatus.DONE
        if process.start is not None and process.pid == self.running_pid:
            return ProcessStatus.RUNNING
        if process.arrival <= self.sim_time:
            return ProcessStatus.READY
        return ProcessStatus.WAITING

    def waiting_pids(self) -> List[str]:
        return [p.pid for p in self.ready_set() if p.pid != self.running_pid]

    # driving

    def advance_tick(self) -> None:
        if self.is_finished:
            raise IllegalStateError(f"Every process has finished (t={self.sim_time}); reset to run again")

        ready = self.ready_set()
        waiting = sum(1 for p in ready if p.pid != self.running_pid)
        self.waiting_history.append(WaitingSample(tick=self.sim_time, waiting_count=waiting))

        run_step(self, ready)
        self.sim_time += 1

        if self.is_finished:
            logger.info("All %d processes finished at t=%d (%s)", len(self.registry), self.sim_time, self.algorithm.value)

    def run_to_completion(self, max_ticks: Optional[int] = None) -> int:
        """
        Advance until every process has finished, or ``max_ticks`` ticks have
        run. Returns the number of ticks advanced.
        """
        ticks = 0
        while not self.is_finished:
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.advance_tick()
            ticks += 1
        return ticks

    def compute_metrics(self) -> Optional[SimulationMetrics]:
        """None until every process has finished."""
        return compute_metrics(self.processes, self.gantt)

    def snapshot(self) -> Dict[str, Any]:
        """
        Read-only view of the current state for a presentation layer.
        """
        return {
            "time": self.sim_time,
            "algorithm": self.algorithm.value,
            "quantum": self.quantum,
            "running": self.running_pid,
            "ready": [p.pid for p in self.ready_set()],
            "waiting": self.waiting_pids(),
            "finished": self.is_finished,
            "processes": [
                {
                    "pid": p.pid,
                    "arrival": p.arrival,
                    "burst": p.burst,
                    "priority": p.priority,
                    "remaining": p.remaining,
                    "start": p.start,
                    "finish": p.finish,
                    "progress": round(p.progress * 100),
                    "status": self.status_of(p).value,
                }
                for p in self.registry
            ],
            "latest_interval": self.gantt[-1] if self.gantt else None,
        }
