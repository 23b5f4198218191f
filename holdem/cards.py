from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .exceptions import DeckExhaustedError

RANKS = "AKQJT98765432"
SUITS = "hdcs"
# Weakest suit first; only consulted to split high-card ties.
SUIT_ORDER = "cdhs"

RANK_VALUE = {rank: value for value, rank in enumerate(RANKS[::-1], start=2)}
RANK_LABEL = {value: rank for rank, value in RANK_VALUE.items()}


@dataclass(frozen=True)
class Card:
    rank: int
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANK_LABEL:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{RANK_LABEL[self.rank]}{self.suit}"

    def __str__(self) -> str:
        return self.label


class CardSource(Protocol):
    """Anything that can reset its unseen cards and hand out fresh ones."""

    def shuffle(self) -> None: ...

    def draw(self, count: int) -> List[Card]: ...


def build_deck(seed: Optional[int] = None) -> List[Card]:
    rng = random.Random(seed)
    deck = [Card(rank, suit) for rank in sorted(RANK_LABEL) for suit in SUITS]
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise DeckExhaustedError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


class Deck:
    """Standard 52-card source. Each shuffle() starts over with a full deck."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self.cards: List[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        self.cards = build_deck(self._rng.getrandbits(32))

    def draw(self, count: int) -> List[Card]:
        return deal(self.cards, count)

    def __len__(self) -> int:
        return len(self.cards)


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    if label[0] not in RANK_VALUE:
        raise ValueError(f"Invalid rank: {label[0]}")
    return Card(RANK_VALUE[label[0]], label[1])


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
