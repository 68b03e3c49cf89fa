"""Gateway: gRPC conversation client — implements ConversationClient port.

Issues one unary call per request against the sidecar's generated `Dapr` stub.
Transport failures (`grpc.RpcError`) are not wrapped; they reach the caller as
raised by grpc.
"""

from __future__ import annotations

import logging
import os

import grpc
from dapr.proto import api_service_v1

from converse_client.l1_entities.errors import TransportError
from converse_client.l1_entities.request import ConversationRequest, ConversationRequestAlpha2
from converse_client.l1_entities.response import ConversationResponse, ConversationResponseAlpha2
from converse_client.l3_interface_adapters.gateways.proto_translator import (
    request_to_proto_alpha1,
    request_to_proto_alpha2,
    response_from_proto_alpha1,
    response_from_proto_alpha2,
)

log = logging.getLogger('converse.grpc')

API_TOKEN_HEADER = 'dapr-api-token'
API_TOKEN_ENV = 'DAPR_API_TOKEN'


class GrpcConversationClient:
    """Wraps the generated Dapr stub to implement the ConversationClient protocol."""

    def __init__(
        self,
        stub: api_service_v1.DaprStub | None,
        *,
        api_token: str | None = None,
        channel: grpc.aio.Channel | None = None,
    ) -> None:
        self._stub = stub
        self._channel = channel
        self._api_token = api_token if api_token is not None else os.environ.get(API_TOKEN_ENV)

    @classmethod
    def from_address(cls, address: str, *, api_token: str | None = None) -> GrpcConversationClient:
        """Open an insecure aio channel to *address*. The client owns and closes it."""
        channel = grpc.aio.insecure_channel(address)
        return cls(api_service_v1.DaprStub(channel), api_token=api_token, channel=channel)

    async def close(self) -> None:
        if self._channel is not None:
            await self._channel.close()
            self._channel = None

    async def __aenter__(self) -> GrpcConversationClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    def _metadata(self) -> tuple[tuple[str, str], ...] | None:
        if not self._api_token:
            return None
        return ((API_TOKEN_HEADER, self._api_token),)

    def _require_stub(self) -> api_service_v1.DaprStub:
        if self._stub is None:
            raise TransportError('conversation client is not connected to a sidecar')
        return self._stub

    async def converse_alpha1(
        self,
        request: ConversationRequest,
        *,
        timeout: float | None = None,
    ) -> ConversationResponse:
        wire = request_to_proto_alpha1(request)
        stub = self._require_stub()
        log.info('ConverseAlpha1: component=%s, inputs=%d', request.name, len(wire.inputs))
        resp = await stub.ConverseAlpha1(wire, timeout=timeout, metadata=self._metadata())
        return response_from_proto_alpha1(resp)

    async def converse_alpha2(
        self,
        request: ConversationRequestAlpha2,
        *,
        timeout: float | None = None,
    ) -> ConversationResponseAlpha2:
        wire = request_to_proto_alpha2(request)
        stub = self._require_stub()
        log.info(
            'ConverseAlpha2: component=%s, inputs=%d, tools=%d',
            request.name,
            len(wire.inputs),
            len(wire.tools),
        )
        resp = await stub.ConverseAlpha2(wire, timeout=timeout, metadata=self._metadata())
        return response_from_proto_alpha2(resp)
