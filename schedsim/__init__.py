"""
Tick-driven CPU scheduling simulator.

Simulates FCFS, SJF, SRTF, Round Robin and Priority scheduling one time unit
at a time, recording a Gantt timeline, a waiting-queue history and summary
metrics. ``schedsim.cli`` provides a terminal driver.
"""

from .engine import Simulation
from .errors import IllegalStateError, NotFoundError, SchedulerError, ValidationError
from .models import (
    Algorithm,
    GanttInterval,
    Process,
    ProcessStatus,
    SimulationConfig,
    SimulationMetrics,
    WaitingSample,
)

__all__ = [
    "Algorithm",
    "GanttInterval",
    "IllegalStateError",
    "NotFoundError",
    "Process",
    "ProcessStatus",
    "SchedulerError",
    "Simulation",
    "SimulationConfig",
    "SimulationMetrics",
    "ValidationError",
    "WaitingSample",
]
