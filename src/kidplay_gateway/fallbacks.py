"""
Fallback policy: network-free answers that always satisfy the response contract.

- random_move: uniform pick from the caller's legal moves (same idea as a random opponent).
- first_open_line: first undrawn line, hLines row-major then vLines.
- fallback_word / fallback_questions: fixed kid-safe content.
"""
from __future__ import annotations

import copy
import random
from typing import Any, Dict, List, Optional, Sequence

from .errors import NoLegalMovesError

FALLBACK_WORDS: Dict[str, List[str]] = {
    "easy": ["cat", "dog", "sun", "car", "book"],
    "medium": ["garden", "planet", "kitchen", "friend", "school"],
    "hard": ["elephant", "computer", "adventure", "butterfly", "mysterious"],
}

FALLBACK_QUESTIONS: List[Dict[str, Any]] = [
    {
        "question": "What color do you get when you mix red and blue?",
        "options": ["Green", "Purple", "Orange", "Yellow"],
        "correct": 1,
    },
    {
        "question": "How many legs does a spider have?",
        "options": ["6", "8", "10", "12"],
        "correct": 1,
    },
    {
        "question": "What is the largest planet in our solar system?",
        "options": ["Earth", "Mars", "Jupiter", "Saturn"],
        "correct": 2,
    },
    {
        "question": "Which animal is known as the 'King of the Jungle'?",
        "options": ["Tiger", "Lion", "Elephant", "Bear"],
        "correct": 1,
    },
    {
        "question": "What do bees make?",
        "options": ["Milk", "Honey", "Butter", "Cheese"],
        "correct": 1,
    },
]


def random_move(possible_moves: Sequence[Any], rng: Optional[random.Random] = None) -> Any:
    if not possible_moves:
        raise NoLegalMovesError()
    return (rng or random).choice(list(possible_moves))


def first_open_line(state: Dict[str, Any]) -> Dict[str, Any]:
    for orientation, key in (("h", "hLines"), ("v", "vLines")):
        for r, line_row in enumerate(state.get(key) or []):
            for c, drawn in enumerate(line_row or []):
                if not drawn:
                    return {"row": r, "col": c, "orientation": orientation}
    raise NoLegalMovesError()


def fallback_word(difficulty: str, rng: Optional[random.Random] = None) -> str:
    words = FALLBACK_WORDS.get(difficulty, FALLBACK_WORDS["medium"])
    return (rng or random).choice(words)


def fallback_questions() -> List[Dict[str, Any]]:
    # Fresh copy so callers can't mutate the shared set.
    return copy.deepcopy(FALLBACK_QUESTIONS)
