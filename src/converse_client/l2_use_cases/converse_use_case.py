"""Use case: send one conversation request and report the outcome as a value."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from converse_client.l1_entities.errors import ConversationError
from converse_client.l1_entities.request import ConversationRequest, ConversationRequestAlpha2
from converse_client.l1_entities.response import ConversationResponse, ConversationResponseAlpha2
from converse_client.l2_use_cases.ports.conversation_client import ConversationClient

log = logging.getLogger('converse.usecase')


@dataclass(frozen=True)
class ConverseOutcome:
    """Result of a conversation call — either a response or the reason it failed."""

    response: ConversationResponse | ConversationResponseAlpha2 | None = None
    error: str = ''
    exception: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.response is not None


class RunConversationUseCase:
    """Issues a single request. Local and transport failures come back in the outcome, never raised."""

    def __init__(self, client: ConversationClient) -> None:
        self._client = client

    async def execute(
        self,
        request: ConversationRequest | ConversationRequestAlpha2,
        *,
        timeout: float | None = None,
    ) -> ConverseOutcome:
        log.info('Conversation request: component=%s, inputs=%d', request.name, len(request.inputs))
        try:
            if isinstance(request, ConversationRequestAlpha2):
                resp = await self._client.converse_alpha2(request, timeout=timeout)
            else:
                resp = await self._client.converse_alpha1(request, timeout=timeout)
        except ConversationError as e:
            err = f'Invalid request: {type(e).__name__}: {e}'
            log.warning(err)
            return ConverseOutcome(error=err, exception=e)
        except Exception as e:
            err = f'Conversation call failed: {type(e).__name__}: {e}'
            log.error(err, exc_info=True)
            return ConverseOutcome(error=err, exception=e)

        log.info('Conversation response: outputs=%d, context_id=%s', len(resp.outputs), resp.context_id)
        return ConverseOutcome(response=resp)
