"""Conversation message entities — a closed tagged union over five role variants."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class MessageRole(enum.Enum):
    USER = 'user'
    SYSTEM = 'system'
    DEVELOPER = 'developer'
    ASSISTANT = 'assistant'
    TOOL = 'tool'


class ConversationMessageContent(BaseModel):
    """One content block of a message."""

    text: str | None = None


class ConversationToolCall(BaseModel):
    """A function invocation requested by the assistant. `arguments` is pre-encoded JSON."""

    id: str
    name: str
    arguments: str = ''


class _RoleMessage(BaseModel):
    name: str | None = None
    content: list[ConversationMessageContent] = Field(default_factory=list)


class UserMessage(_RoleMessage):
    pass


class SystemMessage(_RoleMessage):
    pass


class DeveloperMessage(_RoleMessage):
    pass


class AssistantMessage(_RoleMessage):
    tool_calls: list[ConversationToolCall] = Field(default_factory=list)


class ToolMessage(_RoleMessage):
    tool_id: str | None = None


# Role → slot on ConversationMessage. Validation counts over this table.
VARIANT_SLOTS: dict[MessageRole, str] = {
    MessageRole.USER: 'of_user',
    MessageRole.SYSTEM: 'of_system',
    MessageRole.DEVELOPER: 'of_developer',
    MessageRole.ASSISTANT: 'of_assistant',
    MessageRole.TOOL: 'of_tool',
}


def _texts(texts: tuple[str, ...]) -> list[ConversationMessageContent]:
    return [ConversationMessageContent(text=t) for t in texts]


class ConversationMessage(BaseModel):
    """Exactly one of the `of_*` slots must be set for the message to be sent.

    Prefer the role constructors (`ConversationMessage.user(...)` etc.), which
    always produce a single-variant message. Direct construction is allowed so
    that malformed input can be represented and rejected by `validate_message`.
    """

    of_user: UserMessage | None = None
    of_system: SystemMessage | None = None
    of_developer: DeveloperMessage | None = None
    of_assistant: AssistantMessage | None = None
    of_tool: ToolMessage | None = None

    @classmethod
    def user(cls, *texts: str, name: str | None = None) -> ConversationMessage:
        return cls(of_user=UserMessage(name=name, content=_texts(texts)))

    @classmethod
    def system(cls, *texts: str, name: str | None = None) -> ConversationMessage:
        return cls(of_system=SystemMessage(name=name, content=_texts(texts)))

    @classmethod
    def developer(cls, *texts: str, name: str | None = None) -> ConversationMessage:
        return cls(of_developer=DeveloperMessage(name=name, content=_texts(texts)))

    @classmethod
    def assistant(
        cls,
        *texts: str,
        name: str | None = None,
        tool_calls: list[ConversationToolCall] | None = None,
    ) -> ConversationMessage:
        return cls(of_assistant=AssistantMessage(name=name, content=_texts(texts), tool_calls=tool_calls or []))

    @classmethod
    def tool(cls, *texts: str, tool_id: str | None = None, name: str | None = None) -> ConversationMessage:
        return cls(of_tool=ToolMessage(tool_id=tool_id, name=name, content=_texts(texts)))

    def populated_roles(self) -> list[MessageRole]:
        """Roles whose slot is set, in declaration order."""
        return [role for role, slot in VARIANT_SLOTS.items() if getattr(self, slot) is not None]

    @property
    def active_role(self) -> MessageRole | None:
        """The single populated role, or None when the message is not valid."""
        roles = self.populated_roles()
        return roles[0] if len(roles) == 1 else None

    def is_valid(self) -> bool:
        return validate_message(self)


def validate_message(message: ConversationMessage | None) -> bool:
    """True iff *message* is not None and exactly one role variant is populated."""
    if message is None:
        return False
    return len(message.populated_roles()) == 1
