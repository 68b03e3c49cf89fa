"""Tests for configuration Pydantic models — schema validation only."""

import pytest
from pydantic import ValidationError

from converse_client.l1_entities.config import AppConfig, ConversationDefaults, SidecarConfig


class TestSidecarConfig:
    def test_valid(self):
        cfg = SidecarConfig(grpc_address='localhost:50001')
        assert cfg.grpc_address == 'localhost:50001'
        assert cfg.api_token is None
        assert cfg.timeout is None

    def test_missing_address_raises(self):
        with pytest.raises(ValidationError):
            SidecarConfig()  # type: ignore[call-arg]

    def test_wrong_type_raises(self):
        with pytest.raises(ValidationError):
            SidecarConfig(grpc_address='x', timeout='soon')  # type: ignore[invalid-argument-type]


class TestConversationDefaults:
    def test_optionals_unset(self):
        cfg = ConversationDefaults(component='openai')
        assert cfg.temperature is None
        assert cfg.scrub_pii is None

    def test_missing_component_raises(self):
        with pytest.raises(ValidationError):
            ConversationDefaults()  # type: ignore[call-arg]


class TestAppConfig:
    def test_no_defaults(self):
        """AppConfig has no defaults — bare construction must fail."""
        with pytest.raises(ValidationError):
            AppConfig()  # type: ignore[call-arg]

    def test_valid(self):
        cfg = AppConfig(
            sidecar=SidecarConfig(grpc_address='a:1'),
            conversation=ConversationDefaults(component='echo'),
        )
        assert cfg.conversation.component == 'echo'
