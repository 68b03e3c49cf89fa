"""Port: conversation API client."""

from __future__ import annotations

from typing import Protocol

from converse_client.l1_entities.request import ConversationRequest, ConversationRequestAlpha2
from converse_client.l1_entities.response import ConversationResponse, ConversationResponseAlpha2


class ConversationClient(Protocol):
    """Abstract conversation client. Zero transport types leak through, except transport errors."""

    async def converse_alpha1(
        self,
        request: ConversationRequest,
        *,
        timeout: float | None = None,
    ) -> ConversationResponse:
        """Send a legacy text-input request."""
        ...

    async def converse_alpha2(
        self,
        request: ConversationRequestAlpha2,
        *,
        timeout: float | None = None,
    ) -> ConversationResponseAlpha2:
        """Send a role-tagged message request. Raises on invalid input before any call is made."""
        ...
