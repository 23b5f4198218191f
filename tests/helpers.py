from __future__ import annotations

from typing import List, Optional, Sequence

from holdem.cards import Card, build_deck, deal, parse_cards
from holdem.game import GameEngine
from holdem.models import TableConfig


class StackedDeck:
    """Card source that deals ``labels`` first, then the rest of a fresh deck.

    The engine deals two hole cards per player in seat order, then community
    cards one street at a time.
    """

    def __init__(self, labels: Sequence[str]) -> None:
        top = parse_cards(labels)
        rest = [card for card in build_deck(seed=0) if card not in top]
        self._order: List[Card] = top + rest
        self.cards: List[Card] = []
        self.shuffles = 0

    def shuffle(self) -> None:
        self.cards = list(self._order)
        self.shuffles += 1

    def draw(self, count: int) -> List[Card]:
        return deal(self.cards, count)


def create_engine(
    balances: Sequence[int] = (100, 100),
    *,
    labels: Optional[Sequence[str]] = None,
    min_bet: int = 10,
    community_cap: int = 5,
    reveal_per_street: int = 1,
    match_calls: bool = False,
    seed: int = 42,
) -> GameEngine:
    """Instantiate an engine, optionally with a stacked deck."""
    config = TableConfig(
        min_bet=min_bet,
        community_cap=community_cap,
        reveal_per_street=reveal_per_street,
        match_calls=match_calls,
        seed=seed,
    )
    deck = StackedDeck(labels) if labels is not None else None
    return GameEngine(list(balances), config, deck)


def close_all_streets(engine: GameEngine) -> None:
    while not engine.is_community_complete:
        engine.end_street()
