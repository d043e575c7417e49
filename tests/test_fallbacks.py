import random
import unittest

from kidplay_gateway.errors import NoLegalMovesError
from kidplay_gateway.fallbacks import (
    FALLBACK_QUESTIONS,
    FALLBACK_WORDS,
    fallback_questions,
    fallback_word,
    first_open_line,
    random_move,
)


def _random_state(rng: random.Random, rows: int, cols: int, fill: float) -> dict:
    return {
        "hLines": [[rng.random() < fill for _ in range(cols)] for _ in range(rows + 1)],
        "vLines": [[rng.random() < fill for _ in range(cols + 1)] for _ in range(rows)],
        "boxes": [[{"owner": None} for _ in range(cols)] for _ in range(rows)],
    }


class RandomMoveTests(unittest.TestCase):
    def test_picks_from_possible_moves(self):
        moves = ["a2-a3", "b2-b3", "c2-c3"]
        rng = random.Random(7)
        for _ in range(50):
            self.assertIn(random_move(moves, rng), moves)

    def test_empty_moves_is_caller_error(self):
        with self.assertRaises(NoLegalMovesError) as ctx:
            random_move([])
        self.assertEqual(ctx.exception.status_code, 422)


class FirstOpenLineTests(unittest.TestCase):
    def test_prefers_horizontal_row_major(self):
        state = {"hLines": [[True, True], [True, False]], "vLines": [[False, False, False]], "boxes": [[{}, {}]]}
        self.assertEqual(first_open_line(state), {"row": 1, "col": 1, "orientation": "h"})

    def test_falls_through_to_vertical(self):
        state = {"hLines": [[True]], "vLines": [[False]], "boxes": [[{"owner": None}]]}
        self.assertEqual(first_open_line(state), {"row": 0, "col": 0, "orientation": "v"})

    def test_full_board_has_no_moves(self):
        state = {"hLines": [[True], [True]], "vLines": [[True, True]], "boxes": [[{"owner": 1}]]}
        with self.assertRaises(NoLegalMovesError):
            first_open_line(state)

    def test_always_points_at_an_empty_line(self):
        rng = random.Random(2024)
        for _ in range(500):
            state = _random_state(rng, rng.randint(1, 6), rng.randint(1, 6), rng.random())
            has_empty = any(not v for row in state["hLines"] + state["vLines"] for v in row)
            if not has_empty:
                with self.assertRaises(NoLegalMovesError):
                    first_open_line(state)
                continue
            move = first_open_line(state)
            grid = state["hLines"] if move["orientation"] == "h" else state["vLines"]
            self.assertFalse(grid[move["row"]][move["col"]])


class ContentFallbackTests(unittest.TestCase):
    def test_word_comes_from_difficulty_tier(self):
        for difficulty, words in FALLBACK_WORDS.items():
            for _ in range(20):
                self.assertIn(fallback_word(difficulty), words)

    def test_unknown_difficulty_uses_medium(self):
        self.assertIn(fallback_word("impossible"), FALLBACK_WORDS["medium"])

    def test_questions_are_a_fresh_copy(self):
        first = fallback_questions()
        first[0]["question"] = "changed"
        self.assertEqual(fallback_questions(), FALLBACK_QUESTIONS)
        self.assertEqual(len(FALLBACK_QUESTIONS), 5)


if __name__ == "__main__":
    unittest.main()
