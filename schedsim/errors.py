from __future__ import annotations

from typing import Any, Optional


class SchedulerError(Exception):
    """Base class for every error raised by the simulator."""


class ValidationError(SchedulerError, ValueError):
    """
    Invalid process parameters or workload entries.

    Also a ValueError so callers that only know about ValueError keep working.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.field and self.value is not None:
            return f"Invalid '{self.field}' (value={self.value!r}): {self.message}"
        if self.field:
            return f"Invalid '{self.field}': {self.message}"
        return self.message


class NotFoundError(SchedulerError, KeyError):
    """Lookup or removal of a pid that is not registered."""

    def __init__(self, pid: str):
        self.pid = pid
        super().__init__(pid)

    def __str__(self) -> str:
        return f"No process with pid {self.pid!r}"


class IllegalStateError(SchedulerError):
    """Operation not allowed in the simulation's current state."""
