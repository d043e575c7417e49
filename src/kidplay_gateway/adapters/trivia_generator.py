from __future__ import annotations

from typing import Any, Dict, List

from ..fallbacks import fallback_questions
from ..llm_client import Tuning
from ..parsing import parse_json
from ..validation import TRIVIA_BATCH_SIZE, validate_trivia_batch
from .base import GameAdapter

OUTPUT_FORMAT = f"""
Return your response as a JSON array of exactly {TRIVIA_BATCH_SIZE} objects in this exact format:
[
  {{
    "question": "Your question here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correct": 1
  }}
]
Each question must have exactly 4 options and "correct" must be the 0-3 index of the right option."""


class TriviaGeneratorAdapter(GameAdapter):
    name = "trivia-generator"
    response_key = "questions"
    tuning = Tuning(max_tokens=512, temperature=0.7)

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        difficulty = req["difficulty"]
        user = req.get("userMessage")
        if not user:
            user = f"Generate {TRIVIA_BATCH_SIZE} {difficulty} difficulty trivia questions"
            category = req.get("category")
            user += f" about {category}." if category else "."
        return self._with_system(req["systemPrompt"].rstrip() + "\n" + OUTPUT_FORMAT, user)

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> List[Dict[str, Any]]:
        return validate_trivia_batch(parse_json(raw))

    def fallback(self, req: Dict[str, Any]) -> List[Dict[str, Any]]:
        return fallback_questions()
