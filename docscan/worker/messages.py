"""Task messages - Tagged union of requests and the result-or-error replies."""

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, InstanceOf, TypeAdapter

from docscan.imaging.buffer import PixelBuffer
from docscan.worker.errors import UnknownTaskError


class TaskName(str, Enum):
    """Recognised task identifiers."""

    PERSPECTIVE_TRANSFORM = "perspectiveTransform"
    ENHANCE_B_AND_W = "enhanceBAndW"
    GRAYSCALE = "grayscale"


def _coerce_image(value: Any) -> Any:
    """Accept a PixelBuffer or a ``{width, height, data}`` mapping of RGBA8 bytes."""
    if isinstance(value, Mapping):
        missing = {"width", "height", "data"} - set(value)
        if missing:
            raise ValueError(f"Image mapping is missing {sorted(missing)}")
        return PixelBuffer.from_bytes(int(value["width"]), int(value["height"]), value["data"])
    return value


ImageField = Annotated[InstanceOf[PixelBuffer], BeforeValidator(_coerce_image)]
RequestId = str | int | None


class _TaskMessage(BaseModel):
    """Fields shared by every task request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: RequestId = None
    image: ImageField


class PerspectiveTransformTask(_TaskMessage):
    """Dewarp the quadrilateral given by ``corners`` into a rectangle."""

    task: Literal["perspectiveTransform"] = TaskName.PERSPECTIVE_TRANSFORM.value
    corners: list[Annotated[float, Field(allow_inf_nan=False)]] = Field(
        min_length=8,
        max_length=8,
        description="Corner x,y pairs: top-left, top-right, bottom-right, bottom-left",
    )
    dest_width: int = Field(ge=1, alias="destWidth")
    dest_height: int = Field(ge=1, alias="destHeight")


class EnhanceTask(_TaskMessage):
    """Produce a black-and-white scan of the image."""

    task: Literal["enhanceBAndW"] = TaskName.ENHANCE_B_AND_W.value


class GrayscaleTask(_TaskMessage):
    """Convert the image to grayscale."""

    task: Literal["grayscale"] = TaskName.GRAYSCALE.value


TaskRequest = Annotated[
    Union[PerspectiveTransformTask, EnhanceTask, GrayscaleTask],
    Field(discriminator="task"),
]

_request_adapter: TypeAdapter[TaskRequest] = TypeAdapter(TaskRequest)


class TaskSuccess(BaseModel):
    """Successful reply carrying the result buffer."""

    model_config = ConfigDict(frozen=True)

    id: RequestId = None
    success: Literal[True] = True
    image: InstanceOf[PixelBuffer]

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


class TaskFailure(BaseModel):
    """Failed reply carrying a human-readable error."""

    model_config = ConfigDict(frozen=True)

    id: RequestId = None
    success: Literal[False] = False
    error: str
    error_type: str = "Exception"
    stack: str | None = None


TaskResult = TaskSuccess | TaskFailure


def parse_message(message: Mapping[str, Any]) -> TaskRequest:
    """Validate a raw message into one of the task request models.

    Args:
        message: Mapping with a ``task`` key plus that task's payload

    Returns:
        The matching request model

    Raises:
        UnknownTaskError: If ``task`` is missing or not recognised
        pydantic.ValidationError: If the payload does not fit the task
    """
    task = message.get("task")
    if not isinstance(task, str) or task not in {name.value for name in TaskName}:
        raise UnknownTaskError(task)
    payload = dict(message)
    payload["task"] = TaskName(task).value
    return _request_adapter.validate_python(payload)
