"""Scheduling errors.

Every failure the scheduling engine can report is a `SchedulingError`
carrying a machine-readable `code` and the HTTP status the API answers with.
All of them are raised before any state is mutated, so the caller can simply
reject the request. The REST rendering lives in `handlers.py`.
"""

from typing import Any, Dict


class SchedulingError(Exception):
    """Base class for all scheduling engine errors."""

    code = "SCHEDULING_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class SelfDependency(SchedulingError):
    """A task was declared as depending on itself."""

    code = "SELF_DEPENDENCY"

    def __init__(self, task_id):
        super().__init__(f"Task {task_id} cannot depend on itself.")
        self.task_id = task_id


class CyclicDependency(SchedulingError):
    """The proposed edge would close a cycle in the dependency graph."""

    code = "CYCLIC_DEPENDENCY"

    def __init__(self, predecessor_id, successor_id):
        super().__init__(
            f"Cyclic dependency detected: task {successor_id} already leads to task {predecessor_id}."
        )
        self.predecessor_id = predecessor_id
        self.successor_id = successor_id


class EdgeNotFound(SchedulingError):
    code = "EDGE_NOT_FOUND"
    status_code = 404

    def __init__(self, predecessor_id, successor_id):
        super().__init__(f"Dependency {predecessor_id} -> {successor_id} not found.")
        self.predecessor_id = predecessor_id
        self.successor_id = successor_id


class InvalidDuration(SchedulingError):
    code = "INVALID_DURATION"

    def __init__(self, duration):
        super().__init__(f"Duration must be a non-negative number of working days, got {duration!r}.")
        self.duration = duration


class TaskNotCompleted(SchedulingError):
    """Cascade was requested for a task that is not marked complete."""

    code = "TASK_NOT_COMPLETED"
    status_code = 409

    def __init__(self, task_id):
        super().__init__(f"Task {task_id} is not completed; its successors cannot be rescheduled yet.")
        self.task_id = task_id
