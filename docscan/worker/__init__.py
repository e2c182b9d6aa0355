"""Worker package - Task dispatch boundary around the imaging engine."""

from docscan.worker.dispatcher import handle_message, run_task
from docscan.worker.errors import TaskError, UnknownTaskError
from docscan.worker.messages import (
    EnhanceTask,
    GrayscaleTask,
    PerspectiveTransformTask,
    TaskFailure,
    TaskName,
    TaskRequest,
    TaskResult,
    TaskSuccess,
    parse_message,
)

__all__ = [
    "EnhanceTask",
    "GrayscaleTask",
    "PerspectiveTransformTask",
    "TaskError",
    "TaskFailure",
    "TaskName",
    "TaskRequest",
    "TaskResult",
    "TaskSuccess",
    "UnknownTaskError",
    "handle_message",
    "parse_message",
    "run_task",
]
