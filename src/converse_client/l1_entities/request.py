"""Conversation request entities and their option appliers.

Options are plain functions returning a mutator, so requests can be built as

    req = new_conversation_request('openai', inputs, with_temperature(0.2), with_scrub_pii(True))

or adjusted afterwards with `with_metadata({...})(req)`. Map-valued options
replace the whole mapping, they never merge into the existing one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from converse_client.l1_entities.message import ConversationMessage
from converse_client.l1_entities.tool import ConversationTool, ToolChoice


class ConversationInput(BaseModel):
    """Legacy single-text input."""

    content: str
    role: str | None = None
    scrub_pii: bool | None = None


class ConversationInputAlpha2(BaseModel):
    """An ordered list of role-tagged messages sent as one input."""

    messages: list[ConversationMessage] | None = None
    scrub_pii: bool | None = None


class _RequestOptions(BaseModel):
    # None means "unset" for every optional field; the sidecar applies its own default.
    context_id: str | None = None
    scrub_pii: bool | None = None
    temperature: float | None = None
    parameters: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None


class ConversationRequest(_RequestOptions):
    name: str
    inputs: list[ConversationInput] = Field(default_factory=list)


class ConversationRequestAlpha2(_RequestOptions):
    name: str
    inputs: list[ConversationInputAlpha2] = Field(default_factory=list)
    tools: list[ConversationTool] = Field(default_factory=list)
    tool_choice: ToolChoice | str | None = None


RequestOption = Callable[[_RequestOptions], None]


def new_conversation_request(
    name: str,
    inputs: list[ConversationInput] | None,
    *options: RequestOption,
) -> ConversationRequest:
    """Build a request for component *name*. Nothing is validated until translation."""
    req = ConversationRequest(name=name, inputs=list(inputs or []))
    for opt in options:
        opt(req)
    return req


def new_conversation_request_alpha2(
    name: str,
    inputs: list[ConversationInputAlpha2] | None,
    *options: RequestOption,
) -> ConversationRequestAlpha2:
    req = ConversationRequestAlpha2(name=name, inputs=list(inputs or []))
    for opt in options:
        opt(req)
    return req


def with_context_id(context_id: str) -> RequestOption:
    def apply(req: _RequestOptions) -> None:
        req.context_id = context_id

    return apply


def with_scrub_pii(scrub: bool) -> RequestOption:
    def apply(req: _RequestOptions) -> None:
        req.scrub_pii = scrub

    return apply


def with_temperature(temperature: float) -> RequestOption:
    def apply(req: _RequestOptions) -> None:
        req.temperature = temperature

    return apply


def with_parameters(parameters: Mapping[str, Any]) -> RequestOption:
    """Replace the parameter map. Values are protobuf `Any` messages or plain scalars."""

    def apply(req: _RequestOptions) -> None:
        req.parameters = dict(parameters)

    return apply


def with_metadata(metadata: Mapping[str, str]) -> RequestOption:
    def apply(req: _RequestOptions) -> None:
        req.metadata = dict(metadata)

    return apply


def with_tools(*tools: ConversationTool) -> Callable[[ConversationRequestAlpha2], None]:
    def apply(req: ConversationRequestAlpha2) -> None:
        req.tools = list(tools)

    return apply


def with_tool_choice(choice: ToolChoice | str) -> Callable[[ConversationRequestAlpha2], None]:
    def apply(req: ConversationRequestAlpha2) -> None:
        req.tool_choice = choice

    return apply
