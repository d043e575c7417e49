"""
Request classifier for /api/ask-ai.

Payloads carry no explicit discriminator for board games, so the body's shape selects
the adapter. Precedence is fixed by the order of RULES: a later rule is only tried
when every earlier one failed. Wrapped boards ({"checkers": {...}} / {"chess": {...}})
are unwrapped before any rule runs.
"""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, Dict, List, Tuple

from .errors import ClassificationError, RequestValidationError

KNOWN_GAMES = ("dots-and-boxes", "word-guess-generator", "trivia-generator")
DIFFICULTIES = ("easy", "medium", "hard")
MAX_SYSTEM_PROMPT_CHARS = 5000
MAX_USER_MESSAGE_CHARS = 1000
DOTS_STATE_KEYS = ("hLines", "vLines", "boxes")

UNSUPPORTED_MESSAGE = (
    "Missing or invalid request body. Must include either {history: array}, "
    "{board: array|string, possibleMoves: array} (flat or under checkers/chess), "
    "or a supported game payload."
)


@dataclass(frozen=True)
class Classification:
    adapter: str
    request: Dict[str, Any]


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_fields(body: Dict[str, Any]) -> None:
    """Type/range checks on known top-level fields; unknown fields are ignored."""
    details: List[Dict[str, str]] = []

    def bad(field: str, message: str) -> None:
        details.append({"field": field, "message": message})

    if "history" in body and not isinstance(body["history"], list):
        bad("history", "History must be an array")
    if "board" in body and not isinstance(body["board"], (list, str)):
        bad("board", "Board must be an array or string")
    if "possibleMoves" in body and not isinstance(body["possibleMoves"], list):
        bad("possibleMoves", "Possible moves must be an array")
    if "systemPrompt" in body:
        sp = body["systemPrompt"]
        if not isinstance(sp, str) or len(sp) > MAX_SYSTEM_PROMPT_CHARS:
            bad("systemPrompt", f"System prompt must be a string with max {MAX_SYSTEM_PROMPT_CHARS} characters")
    if "game" in body and body["game"] not in KNOWN_GAMES:
        bad("game", "Invalid game type")
    if "difficulty" in body and body["difficulty"] not in DIFFICULTIES:
        bad("difficulty", "Difficulty must be easy, medium, or hard")
    if "player" in body and not (_is_int(body["player"]) and 0 <= body["player"] <= 10):
        bad("player", "Player must be an integer between 0 and 10")
    if "state" in body and not isinstance(body["state"], dict):
        bad("state", "State must be an object")
    if "userMessage" in body:
        um = body["userMessage"]
        if not isinstance(um, str) or len(um) > MAX_USER_MESSAGE_CHARS:
            bad("userMessage", f"User message must be a string with max {MAX_USER_MESSAGE_CHARS} characters")
    if details:
        raise RequestValidationError(details)


def unwrap_board(body: Dict[str, Any]) -> Dict[str, Any]:
    """Lift a checkers/chess wrapper into top-level board/possibleMoves/systemPrompt."""
    if body.get("board"):
        return body
    for key, board_type in (("checkers", list), ("chess", str)):
        wrapper = body.get(key)
        if not isinstance(wrapper, dict):
            continue
        if isinstance(wrapper.get("board"), board_type) and isinstance(wrapper.get("possibleMoves"), list):
            flat = dict(body)
            flat["board"] = wrapper["board"]
            flat["possibleMoves"] = wrapper["possibleMoves"]
            if not flat.get("systemPrompt") and wrapper.get("systemPrompt"):
                flat["systemPrompt"] = wrapper["systemPrompt"]
            return flat
    return body


def _is_checkers(body: Dict[str, Any]) -> bool:
    return isinstance(body.get("board"), list) and isinstance(body.get("possibleMoves"), list)


def _is_chess(body: Dict[str, Any]) -> bool:
    return isinstance(body.get("board"), str) and isinstance(body.get("possibleMoves"), list)


def _is_grid(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(row, list) for row in value)


def _check_dots_state(state: Any) -> None:
    if not isinstance(state, dict) or any(state.get(k) is None for k in DOTS_STATE_KEYS):
        raise ClassificationError("Invalid state: hLines, vLines, and boxes are required.")
    if not (_is_grid(state["hLines"]) and _is_grid(state["vLines"]) and isinstance(state["boxes"], list)):
        raise ClassificationError("Invalid state: hLines and vLines must be arrays of rows, boxes an array.")


def _is_dots(body: Dict[str, Any]) -> bool:
    return body.get("game") == "dots-and-boxes" and body.get("state") is not None and _is_number(body.get("player"))


def _is_generator(game: str) -> Callable[[Dict[str, Any]], bool]:
    def check(body: Dict[str, Any]) -> bool:
        return body.get("game") == game and bool(body.get("difficulty")) and bool(body.get("systemPrompt"))

    return check


def _is_chat(body: Dict[str, Any]) -> bool:
    return isinstance(body.get("history"), list)


RULES: List[Tuple[Callable[[Dict[str, Any]], bool], str]] = [
    (_is_checkers, "checkers"),
    (_is_chess, "chess"),
    (_is_dots, "dots-and-boxes"),
    (_is_generator("word-guess-generator"), "word-guess-generator"),
    (_is_generator("trivia-generator"), "trivia-generator"),
    (_is_chat, "chat"),
]


def classify(body: Any) -> Classification:
    if not isinstance(body, dict):
        raise ClassificationError("Request body must be a JSON object.", received=[])
    validate_fields(body)
    flat = unwrap_board(body)
    for predicate, adapter in RULES:
        if not predicate(flat):
            continue
        if adapter == "dots-and-boxes":
            _check_dots_state(flat["state"])
        return Classification(adapter=adapter, request=flat)
    raise ClassificationError(UNSUPPORTED_MESSAGE, received=list(body.keys()))
