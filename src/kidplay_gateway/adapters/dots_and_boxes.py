from __future__ import annotations

import json
from typing import Any, Dict, List

from ..fallbacks import first_open_line
from ..llm_client import Tuning
from ..parsing import parse_json
from ..validation import validate_dots_move
from .base import GameAdapter

DEFAULT_DOTS_SYSTEM = (
    "You are playing dots and boxes. hLines and vLines mark drawn lines with true. "
    'Pick one undrawn line and reply only with JSON like {"row": 0, "col": 1, "orientation": "h"}.'
)


class DotsAndBoxesAdapter(GameAdapter):
    name = "dots-and-boxes"
    response_key = "move"
    tuning = Tuning(max_tokens=32, temperature=0.2)
    default_system_prompt = DEFAULT_DOTS_SYSTEM

    def build_prompt(self, req: Dict[str, Any]) -> List[Dict[str, str]]:
        state = json.dumps(req["state"], separators=(",", ":"))
        return self._with_system(req.get("systemPrompt"), f"State: {state}\nPlayer: {req['player']}")

    def parse_and_validate(self, raw: str, req: Dict[str, Any]) -> Dict[str, Any]:
        return validate_dots_move(parse_json(raw), req["state"])

    def fallback(self, req: Dict[str, Any]) -> Dict[str, Any]:
        return first_open_line(req["state"])
