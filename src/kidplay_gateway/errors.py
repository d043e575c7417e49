"""Exception taxonomy for the gateway.

Exceptions that carry ``status_code`` are terminal and become HTTP error
responses. ``UpstreamError`` and ``ParseError`` never leave the gateway:
they are recovered locally through an adapter's fallback.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class GatewayError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ClassificationError(GatewayError):
    """Payload shape did not match any game protocol."""

    status_code = 400

    def __init__(self, message: str, received: Optional[List[str]] = None):
        super().__init__(message)
        self.received = received

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.received is not None:
            body["received"] = self.received
        return body


class RequestValidationError(GatewayError):
    """A known field arrived with the wrong type or out of range."""

    status_code = 422

    def __init__(self, details: List[Dict[str, str]]):
        super().__init__("Validation failed")
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class NoLegalMovesError(GatewayError):
    """The caller sent a well-formed state with nothing left to play."""

    status_code = 422

    def __init__(self, message: str = "No available moves."):
        super().__init__(message)


class ChatUnavailableError(GatewayError):
    status_code = 500

    def __init__(self, message: str = "AI call failed"):
        super().__init__(message)


class UpstreamError(Exception):
    """Network, timeout, non-2xx or empty completion from the AI provider."""


class ParseError(Exception):
    """Model completion could not be turned into a valid answer."""
