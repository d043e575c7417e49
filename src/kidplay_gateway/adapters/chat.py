from __future__ import annotations

from typing import Any, Dict, List

from ..errors import ChatUnavailableError
from ..llm_client import Tuning
from .base import GameAdapter


class ChatAdapter(GameAdapter):
    """Freeform conversation. History is forwarded verbatim and there is no local answer."""

    name = "chat"
    response_key = "message"
    tuning = Tuning(max_tokens=300, temperature=0.7)

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        return list(req["history"])

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> str:
        return raw

    def fallback(self, req: Dict[str, Any]) -> Any:
        raise ChatUnavailableError()

    @property
    def has_fallback(self) -> bool:
        return False
