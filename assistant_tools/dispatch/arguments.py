"""Argument-shape inference for tool calls.

Tool call arguments carry no discriminant, so the shape is decided by trying
each known shape in a fixed priority order and taking the first whose
required fields are all present as strings:

1. CREATE  -- ``message`` and ``remind_at``
2. MESSAGE -- ``message``
3. EMPTY   -- no required fields (any JSON object)

CREATE must be tried before MESSAGE because both require ``message``;
otherwise every reminder creation would look like a forwarding request.
Extra keys are ignored by every shape. Anything that is not a JSON object
matches no shape.
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

logger = logging.getLogger(__name__)


class ArgumentShape(str, Enum):
    CREATE = "create"
    MESSAGE = "message"
    EMPTY = "empty"


class CreateReminderArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: StrictStr
    remind_at: StrictStr


class AskMessageArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: StrictStr


class EmptyArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")


ShapeArgs = Union[CreateReminderArgs, AskMessageArgs, EmptyArgs]

SHAPE_PRIORITY: Tuple[Tuple[ArgumentShape, Type[BaseModel]], ...] = (
    (ArgumentShape.CREATE, CreateReminderArgs),
    (ArgumentShape.MESSAGE, AskMessageArgs),
    (ArgumentShape.EMPTY, EmptyArgs),
)


@dataclass(frozen=True)
class ClassifiedArguments:
    shape: ArgumentShape
    args: ShapeArgs


def _coerce_payload(raw: Any) -> Optional[dict]:
    # Some assistant platforms send arguments as a JSON-encoded string
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Tool call arguments are not valid JSON: {raw!r}")
            return None
    return raw if isinstance(raw, dict) else None


def classify_arguments(raw: Any) -> Optional[ClassifiedArguments]:
    """Return the first matching shape for ``raw``, or None if nothing matches."""
    payload = _coerce_payload(raw)
    if payload is None:
        return None
    for shape, model in SHAPE_PRIORITY:
        try:
            return ClassifiedArguments(shape=shape, args=model.model_validate(payload))
        except ValidationError:
            continue
    return None
