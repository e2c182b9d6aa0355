"""API request and response models."""

import math

from pydantic import BaseModel, Field

from docscan.worker.messages import TaskName


class TaskInfo(BaseModel):
    """A recognised task and the form fields it needs."""

    id: TaskName
    description: str
    fields: list[str] = Field(default_factory=list)


class TaskListResponse(BaseModel):
    """Recognised tasks."""

    tasks: list[TaskInfo]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str


def parse_corners(raw: str) -> list[float]:
    """Parse ``"x0,y0,x1,y1,x2,y2,x3,y3"`` into eight floats.

    Raises:
        ValueError: If the string does not hold exactly eight finite numbers
    """
    parts = [part.strip() for part in raw.replace(";", ",").split(",") if part.strip()]
    if len(parts) != 8:
        raise ValueError(f"corners must hold 8 comma-separated numbers, got {len(parts)}")
    values = [float(part) for part in parts]
    if not all(math.isfinite(value) for value in values):
        raise ValueError("corners must be finite numbers")
    return values
