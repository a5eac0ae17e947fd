from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import IllegalStateError, ValidationError

IDLE = "idle"


def is_int(value) -> bool:
    """True for real integers; bool is rejected even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool)


class Algorithm(Enum):
    FCFS = "FCFS"
    SJF = "SJF"
    SRTF = "SRTF"
    ROUND_ROBIN = "Round Robin"
    PRIORITY = "Priority"

    @classmethod
    def parse(cls, name: str | Algorithm) -> Algorithm:
        """
        Resolve a CLI short name ("rr") or display name ("Round Robin").
        """
        if isinstance(name, Algorithm):
            return name
        key = str(name).strip().lower().replace(" ", "").replace("_", "")
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValidationError("unknown algorithm", field="algorithm", value=name) from None

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @property
    def uses_quantum(self) -> bool:
        return self is Algorithm.ROUND_ROBIN


_SHORT_NAMES = {
    Algorithm.FCFS: "fcfs",
    Algorithm.SJF: "sjf",
    Algorithm.SRTF: "srtf",
    Algorithm.ROUND_ROBIN: "rr",
    Algorithm.PRIORITY: "priority",
}

_ALIASES = {
    "fcfs": Algorithm.FCFS,
    "sjf": Algorithm.SJF,
    "srtf": Algorithm.SRTF,
    "rr": Algorithm.ROUND_ROBIN,
    "roundrobin": Algorithm.ROUND_ROBIN,
    "priority": Algorithm.PRIORITY,
}


@dataclass
class SimulationConfig:
    algorithm: Algorithm = Algorithm.FCFS
    quantum: int = 2

    def validate(self) -> None:
        self.algorithm = Algorithm.parse(self.algorithm)
        if not is_int(self.quantum) or self.quantum <= 0:
            raise IllegalStateError(f"quantum must be a positive integer, got {self.quantum!r}")


class ProcessStatus(Enum):
    DONE = "Done"
    RUNNING = "Running"
    READY = "Ready"
    WAITING = "Waiting"


@dataclass
class Process:
    """
    A scheduling unit plus the runtime fields the engine mutates.

    ``remaining`` counts down to zero; ``start`` and ``finish`` are set once.
    """

    pid: str
    arrival: int
    burst: int
    priority: int = 0
    remaining: int = field(init=False)
    start: Optional[int] = field(default=None, init=False)
    finish: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.remaining = self.burst

    @property
    def is_finished(self) -> bool:
        return self.remaining == 0

    @property
    def progress(self) -> float:
        """Completed share of the burst, 0.0 to 1.0."""
        return 1 - self.remaining / self.burst

    def restore(self) -> None:
        self.remaining = self.burst
        self.start = None
        self.finish = None


@dataclass
class GanttInterval:
    """
    Half-open span [start, end) during which ``pid`` held the CPU.
    """

    pid: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass
class WaitingSample:
    tick: int
    waiting_count: int


@dataclass
class RoundRobinState:
    """Queue of pids holding a slot, the cursor into it, and ticks used at the cursor."""

    queue: List[str] = field(default_factory=list)
    cursor: int = 0
    used: int = 0


@dataclass
class ProcessMetrics:
    pid: str
    arrival: int
    burst: int
    start: int
    finish: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class SimulationMetrics:
    avg_wait: float
    avg_turnaround: float
    avg_response: float
    makespan: int
    throughput: float
    cpu_util: float
    cpu_busy_time: int
    idle_time: int
    context_switches: int
    processes: List[ProcessMetrics] = field(default_factory=list)
