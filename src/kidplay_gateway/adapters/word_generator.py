from __future__ import annotations

from typing import Any, Dict, List

from ..fallbacks import fallback_word
from ..llm_client import Tuning
from ..parsing import clean, unquote
from ..validation import validate_word
from .base import GameAdapter


class WordGeneratorAdapter(GameAdapter):
    """Secret word for the word-guess game: one lower-case word, at least 3 letters."""

    name = "word-guess-generator"
    response_key = "word"
    tuning = Tuning(max_tokens=16, temperature=0.7)

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        user = req.get("userMessage") or f"Generate a {req['difficulty']} difficulty word."
        return self._with_system(req["systemPrompt"], user)

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> str:
        return validate_word(unquote(clean(raw)))

    def fallback(self, req: Dict[str, Any]) -> str:
        return fallback_word(req["difficulty"])
