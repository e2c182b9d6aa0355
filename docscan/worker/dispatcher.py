"""Task dispatcher - Routes task requests to the imaging engine."""

import time
import traceback
from typing import Any, Mapping

from docscan.imaging import PixelBuffer, Quadrilateral, enhance, to_grayscale, warp
from docscan.utils.logging import get_logger
from docscan.worker.errors import TaskError, UnknownTaskError
from docscan.worker.messages import (
    EnhanceTask,
    GrayscaleTask,
    PerspectiveTransformTask,
    TaskFailure,
    TaskRequest,
    TaskResult,
    TaskSuccess,
    parse_message,
)

logger = get_logger(__name__)


def run_task(request: TaskRequest) -> PixelBuffer:
    """Run a validated task request and return its result buffer.

    Args:
        request: One of the task request models

    Returns:
        Newly allocated result buffer, owned by the caller

    Raises:
        UnknownTaskError: If ``request`` is not a recognised request model
        Exception: Any failure from the imaging engine is propagated unchanged
    """
    if isinstance(request, PerspectiveTransformTask):
        corners = Quadrilateral.from_flat(request.corners)
        return warp(request.image, corners, request.dest_width, request.dest_height)
    elif isinstance(request, EnhanceTask):
        return enhance(request.image)
    elif isinstance(request, GrayscaleTask):
        return to_grayscale(request.image)
    else:
        raise UnknownTaskError(getattr(request, "task", type(request).__name__))


def handle_message(message: Mapping[str, Any]) -> TaskResult:
    """Parse, run and reply to a raw task message.

    Never raises: every failure is turned into a TaskFailure carrying the
    error message, the exception type and the traceback.

    Args:
        message: Mapping with ``task``, an optional ``id`` and the task payload

    Returns:
        TaskSuccess with the result buffer, or TaskFailure
    """
    request_id = message.get("id")
    if not isinstance(request_id, (str, int)):
        request_id = None
    task = message.get("task")
    start_time = time.time()

    try:
        request = parse_message(message)
        result = run_task(request)
    except Exception as e:
        error = e.message if isinstance(e, TaskError) else str(e)
        logger.error(
            "Task failed",
            task=task,
            request_id=request_id,
            error_type=type(e).__name__,
            error=error,
        )
        return TaskFailure(
            id=request_id,
            error=error,
            error_type=type(e).__name__,
            stack=traceback.format_exc(),
        )

    logger.info(
        "Task complete",
        task=task,
        request_id=request_id,
        width=result.width,
        height=result.height,
        processing_time_ms=int((time.time() - start_time) * 1000),
    )
    return TaskSuccess(id=request_id, image=result)
