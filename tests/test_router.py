import unittest

from kidplay_gateway.errors import ClassificationError, RequestValidationError
from kidplay_gateway.router import RULES, classify, unwrap_board

CHECKERS_BOARD = [[0, 1, 0], [0, 0, 0], [2, 0, 2]]
FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
DOTS_STATE = {"hLines": [[True]], "vLines": [[False]], "boxes": [[{"owner": None}]]}


class ClassificationPrecedenceTests(unittest.TestCase):
    def test_rule_order_is_fixed(self):
        self.assertEqual(
            [name for _, name in RULES],
            ["checkers", "chess", "dots-and-boxes", "word-guess-generator", "trivia-generator", "chat"],
        )

    def test_checkers_wrapper_beats_trivia_game(self):
        body = {
            "checkers": {"board": CHECKERS_BOARD, "possibleMoves": ["a2-a3"]},
            "game": "trivia-generator",
            "difficulty": "easy",
            "systemPrompt": "Make trivia",
        }
        result = classify(body)
        self.assertEqual(result.adapter, "checkers")
        self.assertEqual(result.request["board"], CHECKERS_BOARD)
        self.assertEqual(result.request["possibleMoves"], ["a2-a3"])

    def test_board_beats_history(self):
        body = {"board": FEN, "possibleMoves": ["e4"], "history": [{"role": "user", "content": "hi"}]}
        self.assertEqual(classify(body).adapter, "chess")

    def test_flat_shapes(self):
        cases = [
            ({"board": CHECKERS_BOARD, "possibleMoves": []}, "checkers"),
            ({"board": FEN, "possibleMoves": ["e4"]}, "chess"),
            ({"game": "dots-and-boxes", "state": DOTS_STATE, "player": 1}, "dots-and-boxes"),
            ({"game": "word-guess-generator", "difficulty": "easy", "systemPrompt": "word"}, "word-guess-generator"),
            ({"game": "trivia-generator", "difficulty": "hard", "systemPrompt": "quiz"}, "trivia-generator"),
            ({"history": []}, "chat"),
        ]
        for body, expected in cases:
            with self.subTest(expected=expected):
                self.assertEqual(classify(body).adapter, expected)

    def test_chess_wrapper(self):
        result = classify({"chess": {"board": FEN, "possibleMoves": ["e4"], "systemPrompt": "play"}})
        self.assertEqual(result.adapter, "chess")
        self.assertEqual(result.request["systemPrompt"], "play")

    def test_chess_wrapper_requires_string_board(self):
        with self.assertRaises(ClassificationError):
            classify({"chess": {"board": CHECKERS_BOARD, "possibleMoves": ["e4"]}})

    def test_generator_without_system_prompt_falls_through(self):
        with self.assertRaises(ClassificationError):
            classify({"game": "word-guess-generator", "difficulty": "easy"})

    def test_dots_requires_numeric_player(self):
        with self.assertRaises(ClassificationError):
            classify({"game": "dots-and-boxes", "state": DOTS_STATE})


class UnwrapTests(unittest.TestCase):
    def test_top_level_system_prompt_wins(self):
        body = {"systemPrompt": "outer", "checkers": {"board": [[0]], "possibleMoves": ["x"], "systemPrompt": "inner"}}
        self.assertEqual(unwrap_board(body)["systemPrompt"], "outer")

    def test_wrapper_system_prompt_used_when_missing(self):
        body = {"checkers": {"board": [[0]], "possibleMoves": ["x"], "systemPrompt": "inner"}}
        self.assertEqual(unwrap_board(body)["systemPrompt"], "inner")

    def test_existing_board_is_left_alone(self):
        body = {"board": FEN, "possibleMoves": ["e4"], "checkers": {"board": [[0]], "possibleMoves": ["x"]}}
        self.assertIs(unwrap_board(body), body)

    def test_input_not_mutated(self):
        body = {"checkers": {"board": [[0]], "possibleMoves": ["x"]}}
        unwrap_board(body)
        self.assertNotIn("board", body)


class RejectionTests(unittest.TestCase):
    def test_unknown_shape_echoes_keys(self):
        with self.assertRaises(ClassificationError) as ctx:
            classify({"foo": 1})
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.to_dict()["received"], ["foo"])

    def test_non_object_body(self):
        for body in (None, [], "history", 3):
            with self.subTest(body=body):
                with self.assertRaises(ClassificationError):
                    classify(body)

    def test_dots_state_missing_fields(self):
        with self.assertRaises(ClassificationError) as ctx:
            classify({"game": "dots-and-boxes", "state": {"hLines": [[False]]}, "player": 0})
        self.assertIn("hLines, vLines, and boxes", ctx.exception.message)
        self.assertNotIn("received", ctx.exception.to_dict())

    def test_dots_state_malformed_grids(self):
        malformed = [
            {"hLines": 5, "vLines": [[False]], "boxes": []},
            {"hLines": [[True], 7], "vLines": [[False]], "boxes": []},
            {"hLines": [[False]], "vLines": "v", "boxes": []},
            {"hLines": [[False]], "vLines": [[False]], "boxes": {}},
        ]
        for state in malformed:
            with self.subTest(state=state):
                with self.assertRaises(ClassificationError) as ctx:
                    classify({"game": "dots-and-boxes", "state": state, "player": 0})
                self.assertEqual(ctx.exception.status_code, 400)
                self.assertTrue(ctx.exception.message.startswith("Invalid state"))

    def test_field_type_errors(self):
        bad_bodies = [
            ({"history": "hi"}, "history"),
            ({"board": 7, "possibleMoves": []}, "board"),
            ({"board": FEN, "possibleMoves": "e4"}, "possibleMoves"),
            ({"game": "tic-tac-toe"}, "game"),
            ({"game": "word-guess-generator", "difficulty": "insane", "systemPrompt": "x"}, "difficulty"),
            ({"game": "dots-and-boxes", "state": DOTS_STATE, "player": 11}, "player"),
            ({"game": "dots-and-boxes", "state": [], "player": 1}, "state"),
            ({"history": [], "systemPrompt": "x" * 5001}, "systemPrompt"),
            ({"history": [], "userMessage": "x" * 1001}, "userMessage"),
        ]
        for body, field in bad_bodies:
            with self.subTest(field=field):
                with self.assertRaises(RequestValidationError) as ctx:
                    classify(body)
                self.assertEqual(ctx.exception.status_code, 422)
                self.assertIn(field, [d["field"] for d in ctx.exception.details])


if __name__ == "__main__":
    unittest.main()
