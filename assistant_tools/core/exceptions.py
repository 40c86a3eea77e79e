"""Error taxonomy for tool-call handling.

Collaborator failures (store or forwarder) derive from ``ToolCallError`` and
abort the whole batch; the HTTP layer turns them into a 500 carrying the
message text. A name/argument mismatch is not an error at all and never
reaches this module.
"""
from typing import Optional


class ToolCallError(Exception):
    """Base class for failures that abort a tool-call batch."""


class PersistenceError(ToolCallError):
    """A reminder store operation failed."""


class ForwardingError(ToolCallError):
    """The external answering service could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(Exception):
    """Required configuration is missing; raised before serving requests."""
