"""Conversation response entities — plain data decoded from the sidecar reply."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from converse_client.l1_entities.message import ConversationToolCall


class ConversationResult(BaseModel):
    result: str = ''
    parameters: dict[str, Any] = Field(default_factory=dict)


class ConversationResponse(BaseModel):
    context_id: str | None = None
    outputs: list[ConversationResult] = Field(default_factory=list)


class ConversationResultMessage(BaseModel):
    content: str = ''
    tool_calls: list[ConversationToolCall] = Field(default_factory=list)


class ConversationResultChoice(BaseModel):
    finish_reason: str = ''
    index: int = 0
    message: ConversationResultMessage = Field(default_factory=ConversationResultMessage)


class ConversationResultAlpha2(BaseModel):
    choices: list[ConversationResultChoice] = Field(default_factory=list)


class ConversationResponseAlpha2(BaseModel):
    context_id: str | None = None
    outputs: list[ConversationResultAlpha2] = Field(default_factory=list)

    def first_content(self) -> str:
        """Content of the first choice of the first output, or '' when the reply is empty."""
        for output in self.outputs:
            for choice in output.choices:
                return choice.message.content
        return ''
