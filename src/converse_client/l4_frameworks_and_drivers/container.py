"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from converse_client.l1_entities.config import AppConfig
from converse_client.l2_use_cases.converse_use_case import RunConversationUseCase
from converse_client.l2_use_cases.ports.config_loader import ConfigLoader
from converse_client.l2_use_cases.ports.conversation_client import ConversationClient
from converse_client.l3_interface_adapters.gateways.grpc_conversation_client import GrpcConversationClient
from converse_client.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig, client: ConversationClient | None = None) -> None:
        self.config = config
        self.client: ConversationClient = client or GrpcConversationClient.from_address(
            config.sidecar.grpc_address,
            api_token=config.sidecar.api_token,
        )
        self.converse = RunConversationUseCase(self.client)

    async def aclose(self) -> None:
        close = getattr(self.client, 'close', None)
        if close is not None:
            await close()

    @staticmethod
    def config_loader() -> ConfigLoader:
        return YamlConfigLoader()
