"""Domain error types."""


class ConversationError(Exception):
    """Base class for errors raised while preparing or issuing a conversation call."""


class MessageShapeError(ConversationError):
    """Raised when a message does not carry exactly one role variant."""


class TranslationError(ConversationError):
    """Raised when a request or one of its inputs cannot be converted to the wire format."""


class TransportError(ConversationError):
    """Raised when no usable transport is available to issue the call."""
