from __future__ import annotations

from typing import Dict, Type

from .base import GameAdapter
from .chat import ChatAdapter
from .checkers import CheckersAdapter
from .chess_game import ChessAdapter
from .dots_and_boxes import DotsAndBoxesAdapter
from .trivia_generator import TriviaGeneratorAdapter
from .word_generator import WordGeneratorAdapter

_ADAPTERS: Dict[str, Type[GameAdapter]] = {
    CheckersAdapter.name: CheckersAdapter,
    ChessAdapter.name: ChessAdapter,
    DotsAndBoxesAdapter.name: DotsAndBoxesAdapter,
    WordGeneratorAdapter.name: WordGeneratorAdapter,
    TriviaGeneratorAdapter.name: TriviaGeneratorAdapter,
    ChatAdapter.name: ChatAdapter,
}


def adapter_names() -> list[str]:
    return list(_ADAPTERS)


def create_adapter(name: str) -> GameAdapter:
    try:
        cls = _ADAPTERS[name]
    except KeyError:
        raise ValueError(f"unknown adapter: {name}") from None
    return cls()
