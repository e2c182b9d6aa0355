"""API router - FastAPI endpoints."""

import time
import uuid

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from docscan import __version__
from docscan.api.models import (
    ErrorResponse,
    HealthResponse,
    TaskInfo,
    TaskListResponse,
    parse_corners,
)
from docscan.config import get_settings
from docscan.imaging.convert import ConversionError, decode_image, encode_png
from docscan.utils.logging import get_logger
from docscan.worker import TaskFailure, TaskName, handle_message

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Document Scan"])

TASKS = [
    TaskInfo(
        id=TaskName.PERSPECTIVE_TRANSFORM,
        description="Dewarp a photographed page given its four corners",
        fields=["corners", "dest_width", "dest_height"],
    ),
    TaskInfo(
        id=TaskName.ENHANCE_B_AND_W,
        description="Turn a document photo into a clean black-and-white scan",
    ),
    TaskInfo(
        id=TaskName.GRAYSCALE,
        description="Convert an image to grayscale",
    ),
]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check if the API is healthy and running",
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment.value,
    )


@router.get(
    "/tasks",
    response_model=TaskListResponse,
    summary="List Tasks",
    description="Get the list of recognised image tasks",
)
async def list_tasks() -> TaskListResponse:
    """List recognised tasks."""
    return TaskListResponse(tasks=TASKS)


@router.post(
    "/tasks/{task}",
    responses={
        200: {
            "content": {"image/png": {}},
            "description": "Processed image as PNG",
        },
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Unknown task"},
        413: {"model": ErrorResponse, "description": "Upload too large"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Processing error"},
    },
    summary="Run Image Task",
    description="""
    Run one image task on an uploaded image and return the result as PNG.

    **Tasks:**
    - `perspectiveTransform` - requires `corners` (8 comma-separated numbers,
      top-left, top-right, bottom-right, bottom-left), `dest_width` and `dest_height`
    - `enhanceBAndW` - black-and-white document scan
    - `grayscale` - grayscale conversion

    **Supported formats:** PNG, JPEG, WEBP, HEIC, BMP, TIFF
    """,
)
async def run_image_task(
    task: str,
    file: UploadFile = File(..., description="Source image"),
    corners: str | None = Form(
        default=None,
        description="perspectiveTransform only: x0,y0,x1,y1,x2,y2,x3,y3",
    ),
    dest_width: int | None = Form(default=None, description="perspectiveTransform only"),
    dest_height: int | None = Form(default=None, description="perspectiveTransform only"),
) -> Response:
    """Decode the upload, dispatch the task and encode the result.

    Raises:
        HTTPException: On unknown tasks, invalid uploads or processing errors
    """
    if task not in {name.value for name in TaskName}:
        raise HTTPException(status_code=404, detail=f"Unknown task: {task}")

    settings = get_settings()

    # Read source file content
    try:
        file_content = await file.read()
    except Exception as e:
        logger.error("Failed to read uploaded file", error=str(e))
        raise HTTPException(status_code=400, detail="Failed to read uploaded file")

    if not file_content:
        raise HTTPException(status_code=400, detail="Empty file uploaded")

    if len(file_content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {settings.max_upload_bytes} bytes",
        )

    try:
        image = await run_in_threadpool(decode_image, file_content)
    except ConversionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request_id = uuid.uuid4().hex
    message: dict = {"id": request_id, "task": task, "image": image}

    if task == TaskName.PERSPECTIVE_TRANSFORM.value:
        if corners is None or dest_width is None or dest_height is None:
            raise HTTPException(
                status_code=400,
                detail="corners, dest_width and dest_height are required for perspectiveTransform",
            )
        try:
            message["corners"] = parse_corners(corners)
            settings.validate_output_size(dest_width, dest_height)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        message["destWidth"] = dest_width
        message["destHeight"] = dest_height

    logger.info(
        "Running image task",
        task=task,
        request_id=request_id,
        filename=file.filename,
        file_size=len(file_content),
        width=image.width,
        height=image.height,
    )

    start_time = time.time()
    result = await run_in_threadpool(handle_message, message)
    processing_time_ms = int((time.time() - start_time) * 1000)

    if isinstance(result, TaskFailure):
        status_code = 422 if result.error_type == "ValidationError" else 500
        raise HTTPException(status_code=status_code, detail=f"Task {task} failed: {result.error}")

    png_bytes = await run_in_threadpool(encode_png, result.image)
    return Response(
        content=png_bytes,
        media_type="image/png",
        headers={
            "X-Task": task,
            "X-Request-Id": request_id,
            "X-Image-Width": str(result.width),
            "X-Image-Height": str(result.height),
            "X-Processing-Time-Ms": str(processing_time_ms),
        },
    )
