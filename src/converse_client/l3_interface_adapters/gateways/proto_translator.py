"""Gateway: translation between conversation entities and the sidecar's protobuf messages.

Wire types come from the generated `dapr.proto.api_v1` module. Optional entity
fields that are None are left unset on the wire rather than sent as zero values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dapr.proto import api_v1
from google.protobuf import any_pb2, struct_pb2, wrappers_pb2
from google.protobuf.message import Message

from converse_client.l1_entities.errors import MessageShapeError, TranslationError
from converse_client.l1_entities.message import (
    VARIANT_SLOTS,
    ConversationMessage,
    ConversationMessageContent,
    ConversationToolCall,
    MessageRole,
)
from converse_client.l1_entities.request import (
    ConversationInputAlpha2,
    ConversationRequest,
    ConversationRequestAlpha2,
)
from converse_client.l1_entities.response import (
    ConversationResponse,
    ConversationResponseAlpha2,
    ConversationResult,
    ConversationResultAlpha2,
    ConversationResultChoice,
    ConversationResultMessage,
)
from converse_client.l1_entities.tool import ConversationTool, ToolChoice

log = logging.getLogger('converse.grpc')

_WIRE_VARIANT_TYPES: dict[MessageRole, str] = {
    MessageRole.USER: 'ConversationMessageOfUser',
    MessageRole.SYSTEM: 'ConversationMessageOfSystem',
    MessageRole.DEVELOPER: 'ConversationMessageOfDeveloper',
    MessageRole.ASSISTANT: 'ConversationMessageOfAssistant',
    MessageRole.TOOL: 'ConversationMessageOfTool',
}


def _set_only(**fields: Any) -> dict[str, Any]:
    """Drop None values so they stay unset on the wire."""
    return {k: v for k, v in fields.items() if v is not None}


def _content_to_proto(content: ConversationMessageContent) -> api_v1.ConversationMessageContent:
    return api_v1.ConversationMessageContent(**_set_only(text=content.text))


def _tool_call_to_proto(call: ConversationToolCall) -> api_v1.ConversationToolCalls:
    # arguments is already-encoded JSON; copied verbatim.
    return api_v1.ConversationToolCalls(
        id=call.id,
        function=api_v1.ConversationToolCallsOfFunction(name=call.name, arguments=call.arguments),
    )


def message_to_proto(message: ConversationMessage | None) -> api_v1.ConversationMessage:
    """Translate one message. Raises MessageShapeError unless exactly one role variant is set."""
    if message is None:
        raise MessageShapeError('message is None')
    roles = message.populated_roles()
    if not roles:
        raise MessageShapeError('message has no role variant set; exactly one is required')
    if len(roles) > 1:
        names = ', '.join(r.value for r in roles)
        raise MessageShapeError(f'message has {len(roles)} role variants set ({names}); exactly one is allowed')

    role = roles[0]
    slot = VARIANT_SLOTS[role]
    payload = getattr(message, slot)

    fields = _set_only(name=payload.name)
    fields['content'] = [_content_to_proto(c) for c in payload.content]
    if role is MessageRole.ASSISTANT:
        fields['tool_calls'] = [_tool_call_to_proto(tc) for tc in payload.tool_calls]
    elif role is MessageRole.TOOL:
        fields.update(_set_only(tool_id=payload.tool_id))

    wire_type = getattr(api_v1, _WIRE_VARIANT_TYPES[role])
    return api_v1.ConversationMessage(**{slot: wire_type(**fields)})


def tools_to_proto(tool: ConversationTool | None) -> list[api_v1.ConversationTools] | None:
    """Wrap one tool declaration in its wire container. None → None (no tools advertised)."""
    if tool is None:
        return None
    function = api_v1.ConversationToolsFunction(**_set_only(name=tool.name, description=tool.description))
    if tool.parameters is not None:
        schema = struct_pb2.Struct()
        schema.update(tool.parameters)
        function.parameters.CopyFrom(schema)
    return [api_v1.ConversationTools(function=function)]


def input_to_proto(inp: ConversationInputAlpha2 | None) -> api_v1.ConversationInputAlpha2 | None:
    """Translate an input's messages in order.

    Returns None when there is nothing to send or when any message is malformed;
    one bad message discards the whole input.
    """
    if inp is None or not inp.messages:
        return None
    messages = []
    for i, msg in enumerate(inp.messages):
        try:
            messages.append(message_to_proto(msg))
        except MessageShapeError as e:
            log.warning('Dropping input: message %d is invalid (%s)', i, e)
            return None
    return api_v1.ConversationInputAlpha2(messages=messages, **_set_only(scrub_pii=inp.scrub_pii))


def tool_choice_to_str(choice: ToolChoice | str | None) -> str | None:
    """Resolve a tool choice to the string sent on the wire. Custom tool names pass through."""
    if choice is None:
        return None
    if isinstance(choice, ToolChoice):
        return choice.value
    return str(choice)


def _to_any(key: str, value: Any) -> any_pb2.Any:
    if isinstance(value, any_pb2.Any):
        return value
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        wrapped: Message = wrappers_pb2.BoolValue(value=value)
    elif isinstance(value, int):
        wrapped = wrappers_pb2.Int64Value(value=value)
    elif isinstance(value, float):
        wrapped = wrappers_pb2.DoubleValue(value=value)
    elif isinstance(value, str):
        wrapped = wrappers_pb2.StringValue(value=value)
    elif isinstance(value, bytes):
        wrapped = wrappers_pb2.BytesValue(value=value)
    elif isinstance(value, Message):
        wrapped = value
    else:
        raise TranslationError(f'parameter {key!r} has unsupported type {type(value).__name__}')
    packed = any_pb2.Any()
    packed.Pack(wrapped)
    return packed


def parameters_to_proto(parameters: Mapping[str, Any] | None) -> dict[str, any_pb2.Any]:
    return {k: _to_any(k, v) for k, v in (parameters or {}).items()}


def _fill_common(wire: Any, req: ConversationRequest | ConversationRequestAlpha2) -> None:
    for key, packed in parameters_to_proto(req.parameters).items():
        wire.parameters[key].CopyFrom(packed)
    if req.metadata:
        wire.metadata.update(req.metadata)
    if req.temperature is not None:
        wire.temperature = req.temperature


def request_to_proto_alpha1(req: ConversationRequest) -> api_v1.ConversationRequest:
    if not req.inputs:
        raise TranslationError(f'request for {req.name!r} has no inputs')
    inputs = [
        api_v1.ConversationInput(content=i.content, **_set_only(role=i.role, scrubPII=i.scrub_pii)) for i in req.inputs
    ]
    wire = api_v1.ConversationRequest(
        name=req.name,
        inputs=inputs,
        **_set_only(contextID=req.context_id, scrubPII=req.scrub_pii),
    )
    _fill_common(wire, req)
    return wire


def request_to_proto_alpha2(req: ConversationRequestAlpha2) -> api_v1.ConversationRequestAlpha2:
    """Translate a full request. Raises TranslationError if any input yields nothing to send."""
    if not req.inputs:
        raise TranslationError(f'request for {req.name!r} has no inputs')
    inputs = []
    for i, inp in enumerate(req.inputs):
        wire_input = input_to_proto(inp)
        if wire_input is None:
            raise TranslationError(f'input {i} of request for {req.name!r} has no valid messages')
        inputs.append(wire_input)

    tools = []
    for tool in req.tools:
        tools.extend(tools_to_proto(tool) or [])

    wire = api_v1.ConversationRequestAlpha2(
        name=req.name,
        inputs=inputs,
        tools=tools,
        **_set_only(
            context_id=req.context_id,
            scrub_pii=req.scrub_pii,
            tool_choice=tool_choice_to_str(req.tool_choice),
        ),
    )
    _fill_common(wire, req)
    return wire


def response_from_proto_alpha1(resp: Any) -> ConversationResponse:
    return ConversationResponse(
        context_id=resp.contextID or None,
        outputs=[ConversationResult(result=o.result, parameters=dict(o.parameters)) for o in resp.outputs],
    )


def response_from_proto_alpha2(resp: Any) -> ConversationResponseAlpha2:
    outputs = []
    for output in resp.outputs:
        choices = []
        for choice in output.choices:
            tool_calls = [
                ConversationToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
                for tc in choice.message.tool_calls
            ]
            choices.append(
                ConversationResultChoice(
                    finish_reason=choice.finish_reason,
                    index=choice.index,
                    message=ConversationResultMessage(content=choice.message.content, tool_calls=tool_calls),
                )
            )
        outputs.append(ConversationResultAlpha2(choices=choices))
    return ConversationResponseAlpha2(context_id=resp.context_id or None, outputs=outputs)
