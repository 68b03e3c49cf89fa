"""Tool declaration and tool-choice entities."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel


class ToolChoice(enum.Enum):
    NONE = 'none'
    AUTO = 'auto'
    REQUIRED = 'required'


class ConversationTool(BaseModel):
    """A function the model may call. `parameters` is an opaque JSON-schema mapping."""

    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None
