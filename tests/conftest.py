"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from pathlib import Path

import pytest

from converse_client.l1_entities.config import AppConfig
from converse_client.l1_entities.message import (
    AssistantMessage,
    ConversationMessage,
    ConversationMessageContent,
    ConversationToolCall,
    DeveloperMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from converse_client.l1_entities.request import ConversationRequest, ConversationRequestAlpha2
from converse_client.l1_entities.response import (
    ConversationResponse,
    ConversationResponseAlpha2,
    ConversationResult,
    ConversationResultAlpha2,
    ConversationResultChoice,
    ConversationResultMessage,
)
from converse_client.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeConversationClient:
    """Fake conversation client for L2 use case tests."""

    def __init__(self, content: str = 'Fake reply', context_id: str | None = 'ctx-fake'):
        self._content = content
        self._context_id = context_id
        self._error: BaseException | None = None
        self.alpha1_calls: list[tuple[ConversationRequest, float | None]] = []
        self.alpha2_calls: list[tuple[ConversationRequestAlpha2, float | None]] = []
        self.close_calls = 0

    async def converse_alpha1(self, request: ConversationRequest, *, timeout: float | None = None):
        self.alpha1_calls.append((request, timeout))
        if self._error is not None:
            raise self._error
        return ConversationResponse(
            context_id=self._context_id,
            outputs=[ConversationResult(result=self._content)],
        )

    async def converse_alpha2(self, request: ConversationRequestAlpha2, *, timeout: float | None = None):
        self.alpha2_calls.append((request, timeout))
        if self._error is not None:
            raise self._error
        return ConversationResponseAlpha2(
            context_id=self._context_id,
            outputs=[
                ConversationResultAlpha2(
                    choices=[
                        ConversationResultChoice(
                            finish_reason='stop',
                            message=ConversationResultMessage(content=self._content),
                        )
                    ]
                )
            ],
        )

    async def close(self) -> None:
        self.close_calls += 1

    def set_error(self, error: BaseException) -> None:
        self._error = error


def _content(text: str) -> list[ConversationMessageContent]:
    return [ConversationMessageContent(text=text)]


# --- Standard Fixtures ---


@pytest.fixture
def user_msg() -> UserMessage:
    return UserMessage(name='user', content=_content('hi'))


@pytest.fixture
def system_msg() -> SystemMessage:
    return SystemMessage(name='system', content=_content('you are helpful'))


@pytest.fixture
def developer_msg() -> DeveloperMessage:
    return DeveloperMessage(name='dev', content=_content('instruction'))


@pytest.fixture
def assistant_msg() -> AssistantMessage:
    return AssistantMessage(
        name='assistant',
        content=_content('response'),
        tool_calls=[ConversationToolCall(id='call-1', name='get_weather', arguments='{"location":"NYC"}')],
    )


@pytest.fixture
def tool_msg() -> ToolMessage:
    return ToolMessage(tool_id='call-1', name='get_weather', content=_content('sunny'))


@pytest.fixture
def valid_user_message() -> ConversationMessage:
    return ConversationMessage.user('hi', name='user')


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
sidecar:
  grpc_address: "localhost:50007"
  api_token: "secret"
  timeout: 15
conversation:
  component: "openai"
  temperature: 0.3
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p


@pytest.fixture
def fake_client() -> FakeConversationClient:
    return FakeConversationClient()
