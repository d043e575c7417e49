from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from ..errors import ParseError
from ..fallbacks import random_move
from ..llm_client import Tuning
from ..parsing import clean, parse_json, unquote
from ..validation import validate_move_membership
from .base import GameAdapter

log = logging.getLogger("adapters.checkers")

DEFAULT_CHECKERS_SYSTEM = (
    "You are playing checkers. Choose the best move from the list of possible moves. "
    "Reply with exactly one move copied from that list and nothing else."
)


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


class CheckersAdapter(GameAdapter):
    """Board is a 2-D array; the answer must be one of the caller's possibleMoves."""

    name = "checkers"
    response_key = "move"
    tuning = Tuning(max_tokens=32, temperature=0.2)
    default_system_prompt = DEFAULT_CHECKERS_SYSTEM

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        log.info("Board size: %d, possible moves: %d", len(req["board"]), len(req["possibleMoves"]))
        user = f"Board: {_compact(req['board'])}\nPossible Moves: {_compact(req['possibleMoves'])}"
        return self._with_system(req.get("systemPrompt"), user)

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> Any:
        # Moves may be JSON objects/arrays or bare notation strings ("a2-a3", "12").
        moves = req["possibleMoves"]
        bare = unquote(clean(raw))
        try:
            parsed = parse_json(raw)
        except ParseError:
            return validate_move_membership(bare, moves)
        try:
            return validate_move_membership(parsed, moves)
        except ParseError:
            return validate_move_membership(bare, moves)

    def fallback(self, req: Dict[str, Any]) -> Any:
        return random_move(req["possibleMoves"])
