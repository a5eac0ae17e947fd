from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from .errors import NotFoundError, ValidationError
from .models import IDLE, Process, is_int

logger = logging.getLogger(__name__)


class ProcessRegistry:
    """
    Owns the process set. Insertion order is kept for display; the engine
    never relies on it for scheduling decisions.
    """

    def __init__(self) -> None:
        self._processes: Dict[str, Process] = {}

    def add(self, pid: str, arrival: int, burst: int, priority: int = 0) -> Process:
        pid = str(pid)
        if not pid or pid == IDLE:
            raise ValidationError("pid must be a non-empty name other than 'idle'", field="pid", value=pid)
        if pid in self._processes:
            raise ValidationError("duplicate pid", field="pid", value=pid)
        if not is_int(arrival) or arrival < 0:
            raise ValidationError("must be a non-negative integer", field="arrival", value=arrival)
        if not is_int(burst) or burst <= 0:
            raise ValidationError("must be a positive integer", field="burst", value=burst)
        if not is_int(priority):
            raise ValidationError("must be an integer", field="priority", value=priority)

        process = Process(pid=pid, arrival=arrival, burst=burst, priority=priority)
        self._processes[pid] = process
        logger.debug("Added %s (arrival=%d, burst=%d, priority=%d)", pid, arrival, burst, priority)
        return process

    def remove(self, pid: str) -> Process:
        try:
            process = self._processes.pop(pid)
        except KeyError:
            raise NotFoundError(pid) from None
        logger.debug("Removed %s", pid)
        return process

    def get(self, pid: str) -> Process:
        try:
            return self._processes[pid]
        except KeyError:
            raise NotFoundError(pid) from None

    def restore_all(self) -> None:
        for process in self._processes.values():
            process.restore()

    def all_finished(self) -> bool:
        return all(p.is_finished for p in self._processes.values())

    @property
    def pids(self) -> List[str]:
        return list(self._processes)

    def __contains__(self, pid: object) -> bool:
        return pid in self._processes

    def __iter__(self) -> Iterator[Process]:
        return iter(list(self._processes.values()))

    def __len__(self) -> int:
        return len(self._processes)
