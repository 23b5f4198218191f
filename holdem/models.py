from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .cards import Card
from .exceptions import GameConfigError


class Phase(str, Enum):
    DEALT = "DEALT"
    BETTING = "BETTING"
    STREET_CLOSED = "STREET_CLOSED"


class Decision(str, Enum):
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


class ResultType(str, Enum):
    WIN = "win"
    DRAW = "draw"


@dataclass
class TableConfig:
    min_bet: int = 10
    community_cap: int = 5
    reveal_per_street: int = 1
    match_calls: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.min_bet < 0:
            raise GameConfigError("min_bet must not be negative")
        if self.community_cap < 1:
            raise GameConfigError("community_cap must be at least 1")
        if self.reveal_per_street < 1:
            raise GameConfigError("reveal_per_street must be at least 1")


@dataclass
class Player:
    index: int
    balance: int
    hole_cards: List[Card] = field(default_factory=list)
    folded: bool = False
    active: bool = True
    total_in_pot: int = 0

    def reset_for_round(self, hole_cards: List[Card]) -> None:
        self.hole_cards = list(hole_cards)
        self.folded = False
        self.active = True
        self.total_in_pot = 0


@dataclass
class RoundEntry:
    # Money committed during the current street and the player's decision.
    committed: int = 0
    decision: Optional[Decision] = None
