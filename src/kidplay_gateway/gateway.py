"""
Request pipeline for /api/ask-ai.

classify -> build prompt -> one upstream call -> parse -> validate -> respond.
Upstream failures and bad model output are recovered through the adapter's fallback;
only classification errors, empty legal-move sets and chat failures become error statuses.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .adapters import create_adapter
from .adapters.base import GameAdapter
from .errors import ParseError, UpstreamError
from .llm_client import AIClient
from .router import classify

log = logging.getLogger("gateway")

UPSTREAM_FAILED = "AI call failed, used fallback."
INVALID_OUTPUT = "AI response invalid, used fallback."


@dataclass
class GatewayResponse:
    status: int
    body: Dict[str, Any] = field(default_factory=dict)
    adapter: Optional[str] = None
    used_fallback: bool = False


class Gateway:
    def __init__(self, client: Optional[AIClient] = None):
        self.client = client or AIClient()

    def handle(self, body: Any) -> GatewayResponse:
        """Serve one request. GatewayError subclasses propagate to the HTTP layer."""
        classification = classify(body)
        adapter = create_adapter(classification.adapter)
        req = classification.request
        log.info("--- %s AI REQUEST ---", adapter.name.upper())

        if not self.client.available:
            # Fallback-only mode is silent: no error annotation.
            return self._fallback(adapter, req, None)

        messages = adapter.build_prompt(req)
        try:
            raw = self.client.complete(messages, adapter.tuning)
        except UpstreamError as exc:
            log.warning("%s upstream failure: %s", adapter.name, exc)
            return self._fallback(adapter, req, UPSTREAM_FAILED)

        try:
            answer = adapter.parse_and_validate(raw, req)
        except ParseError as exc:
            log.info("%s response rejected (%s), using fallback", adapter.name, exc)
            return self._fallback(adapter, req, INVALID_OUTPUT)

        log.info("%s answer accepted", adapter.name)
        return GatewayResponse(status=200, body={adapter.response_key: answer}, adapter=adapter.name)

    def _fallback(self, adapter: GameAdapter, req: Dict[str, Any], error: Optional[str]) -> GatewayResponse:
        answer = adapter.fallback(req)
        body: Dict[str, Any] = {adapter.response_key: answer}
        if error:
            body["error"] = error
        return GatewayResponse(status=200, body=body, adapter=adapter.name, used_fallback=True)
