"""
Answer validation against caller-supplied constraints.

The gateway never computes legality itself: moves are checked for membership in the
caller's legal-move set (or against the caller's line grid for dots-and-boxes).
Every check raises ParseError with a short reason on failure.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .errors import ParseError

TRIVIA_BATCH_SIZE = 5
TRIVIA_OPTION_COUNT = 4
MIN_WORD_LENGTH = 3


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_move_membership(move: Any, possible_moves: Sequence[Any]) -> Any:
    """Exact membership only: no case folding, trimming or fuzzy matching."""
    for candidate in possible_moves:
        if type(candidate) is type(move) and candidate == move:
            return candidate
    raise ParseError("move_not_in_possible_moves")


def validate_dots_move(move: Any, state: Dict[str, Any]) -> Dict[str, Any]:
    """Shape check plus 'line not already drawn' check."""
    if not isinstance(move, dict):
        raise ParseError("move_not_an_object")
    row, col, orientation = move.get("row"), move.get("col"), move.get("orientation")
    if not (_is_int(row) and _is_int(col)):
        raise ParseError("row_col_not_integers")
    if orientation not in ("h", "v"):
        raise ParseError("bad_orientation")
    grid = state.get("hLines") if orientation == "h" else state.get("vLines")
    if not isinstance(grid, list) or not 0 <= row < len(grid):
        raise ParseError("row_out_of_range")
    line_row = grid[row]
    if not isinstance(line_row, list) or not 0 <= col < len(line_row):
        raise ParseError("col_out_of_range")
    if line_row[col]:
        raise ParseError("line_already_drawn")
    return {"row": row, "col": col, "orientation": orientation}


def validate_word(word: Any) -> str:
    if not isinstance(word, str) or not word:
        raise ParseError("empty_word")
    if any(ch.isspace() for ch in word):
        raise ParseError("word_contains_whitespace")
    if len(word) < MIN_WORD_LENGTH:
        raise ParseError("word_too_short")
    return word.lower()


def validate_trivia_batch(questions: Any) -> List[Dict[str, Any]]:
    """All-or-nothing: one malformed question rejects the whole batch."""
    if not isinstance(questions, list) or len(questions) != TRIVIA_BATCH_SIZE:
        raise ParseError("invalid_questions_array")
    batch: List[Dict[str, Any]] = []
    for index, q in enumerate(questions):
        if not isinstance(q, dict):
            raise ParseError(f"invalid_question_structure_at_{index}")
        text, options, correct = q.get("question"), q.get("options"), q.get("correct")
        if not isinstance(text, str) or not text.strip():
            raise ParseError(f"invalid_question_structure_at_{index}")
        if not isinstance(options, list) or len(options) != TRIVIA_OPTION_COUNT:
            raise ParseError(f"invalid_question_structure_at_{index}")
        if not all(isinstance(o, str) and o.strip() for o in options):
            raise ParseError(f"invalid_question_structure_at_{index}")
        if not _is_int(correct) or not 0 <= correct < TRIVIA_OPTION_COUNT:
            raise ParseError(f"invalid_question_structure_at_{index}")
        batch.append({"question": text, "options": list(options), "correct": correct})
    return batch


__all__ = [
    "validate_move_membership",
    "validate_dots_move",
    "validate_word",
    "validate_trivia_batch",
    "TRIVIA_BATCH_SIZE",
]
