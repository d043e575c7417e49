"""
Game adapter abstractions for one /api/ask-ai request.

Each adapter owns one game family: it turns the caller's state into chat messages,
turns the model's completion back into a validated answer, and knows how to compute a
local answer when the model cannot be used.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..llm_client import Tuning


class GameAdapter:
    """Interface for per-game prompt construction, validation and fallback."""

    name: str = "base"
    response_key: str = "move"
    tuning: Tuning = Tuning(max_tokens=32, temperature=0.2)
    default_system_prompt: Optional[str] = None

    # -- prompting ---------------------------------------------------------
    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        """Produce the chat messages to send upstream."""
        raise NotImplementedError

    # -- answers -----------------------------------------------------------
    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> Any:
        """Return a validated answer or raise ParseError."""
        raise NotImplementedError

    def fallback(self, req: Dict[str, Any]) -> Any:
        """Network-free answer computed purely from the request."""
        raise NotImplementedError

    @property
    def has_fallback(self) -> bool:
        return True

    # Utility for children -------------------------------------------------
    def _with_system(self, system_prompt: Optional[str], user_content: str) -> List[Dict[str, str]]:
        system = system_prompt or self.default_system_prompt
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user_content})
        return messages
