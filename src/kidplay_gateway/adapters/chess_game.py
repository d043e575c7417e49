from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import chess

from ..fallbacks import random_move
from ..llm_client import Tuning
from ..parsing import clean, unquote
from ..validation import validate_move_membership
from .base import GameAdapter

log = logging.getLogger("adapters.chess")

DEFAULT_CHESS_SYSTEM = (
    "You are a strong chess player. Choose the best move from the list of possible moves. "
    "Reply with exactly one move copied from that list and nothing else."
)


def side_to_move(fen: str) -> Optional[str]:
    """Read the side to move from a FEN; None when the FEN does not parse."""
    try:
        board = chess.Board(fen)
    except ValueError:
        return None
    return "white" if board.turn == chess.WHITE else "black"


class ChessAdapter(GameAdapter):
    """Board is a FEN string; the answer must be an exact element of possibleMoves."""

    name = "chess"
    response_key = "move"
    tuning = Tuning(max_tokens=16, temperature=0.2)
    default_system_prompt = DEFAULT_CHESS_SYSTEM

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        fen = req["board"]
        log.info("Number of possible moves: %d", len(req["possibleMoves"]))
        lines = [f"FEN: {fen}"]
        side = side_to_move(fen)
        if side:
            lines.append(f"Side to move: {side}")
        lines.append(f"Possible Moves: {json.dumps(req['possibleMoves'], separators=(',', ':'))}")
        return self._with_system(req.get("systemPrompt"), "\n".join(lines))

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> Any:
        return validate_move_membership(unquote(clean(raw)), req["possibleMoves"])

    def fallback(self, req: Dict[str, Any]) -> Any:
        return random_move(req["possibleMoves"])
