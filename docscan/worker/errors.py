"""Task dispatch errors."""

from typing import Any


class TaskError(Exception):
    """Exception raised when a task cannot be dispatched or run."""

    def __init__(self, message: str, task: str | None, details: dict[str, Any] | None = None):
        self.message = message
        self.task = task
        self.details = details or {}
        super().__init__(f"[{task}] {message}")


class UnknownTaskError(TaskError):
    """Exception raised for a task identifier outside the recognised set."""

    def __init__(self, task: Any):
        super().__init__(f"Unknown task in worker: {task}", task=None if task is None else str(task))
