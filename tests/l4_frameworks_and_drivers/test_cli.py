"""Tests for CLI entry point — patches deferred imports at source module level."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from converse_client import __version__
from converse_client.l1_entities.errors import TransportError
from converse_client.l4_frameworks_and_drivers.cli import (
    _build_request,  # noqa: PLC2701 -- testing private helper
    cli,
)
from converse_client.l4_frameworks_and_drivers.config import build_app_config
from converse_client.l4_frameworks_and_drivers.container import DependencyContainer
from tests.conftest import FakeConversationClient

# cli() imports DependencyContainer lazily, so patch it where it is defined.
_CONTAINER = 'converse_client.l4_frameworks_and_drivers.container.DependencyContainer'


def _container_with(fake: FakeConversationClient):
    def factory(config):
        return DependencyContainer(config, client=fake)

    return factory


class TestBuildRequest:
    def test_user_only(self):
        config = build_app_config({'conversation': {'component': 'openai'}})
        req = _build_request(config, 'hello')
        assert req.name == 'openai'
        assert len(req.inputs) == 1
        messages = req.inputs[0].messages
        assert len(messages) == 1
        assert messages[0].of_user.content[0].text == 'hello'
        assert req.temperature is None
        assert req.scrub_pii is None

    def test_system_and_options(self):
        config = build_app_config({})
        req = _build_request(
            config,
            'hello',
            system_prompt='be brief',
            temperature=0.4,
            context_id='ctx',
            scrub_pii=True,
        )
        messages = req.inputs[0].messages
        assert messages[0].of_system is not None
        assert messages[1].of_user is not None
        assert req.temperature == 0.4
        assert req.context_id == 'ctx'
        assert req.scrub_pii is True

    def test_config_defaults_used(self):
        config = build_app_config({'conversation': {'temperature': 0.7, 'scrub_pii': True}})
        req = _build_request(config, 'hello')
        assert req.temperature == 0.7
        assert req.scrub_pii is True


class TestCli:
    def test_version(self):
        result = CliRunner().invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_prints_reply(self, sample_config_yaml: Path):
        fake = FakeConversationClient(content='Hello from the model')
        with patch(_CONTAINER, side_effect=_container_with(fake)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'hi there'])

        assert result.exit_code == 0, result.output
        assert 'Hello from the model' in result.output
        request, timeout = fake.alpha2_calls[0]
        assert request.name == 'openai'
        assert timeout == 15.0
        assert fake.close_calls == 1

    def test_component_override(self, sample_config_yaml: Path):
        fake = FakeConversationClient()
        with patch(_CONTAINER, side_effect=_container_with(fake)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), '-n', 'ollama', 'hi'])

        assert result.exit_code == 0, result.output
        assert fake.alpha2_calls[0][0].name == 'ollama'

    def test_error_exits_nonzero(self, sample_config_yaml: Path):
        fake = FakeConversationClient()
        fake.set_error(TransportError('not connected'))
        with patch(_CONTAINER, side_effect=_container_with(fake)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'hi'])

        assert result.exit_code == 1
        assert 'not connected' in result.output

    def test_missing_config_file(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ['-c', str(tmp_path / 'missing.yaml'), 'hi'])
        assert result.exit_code != 0
