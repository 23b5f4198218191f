"""Texas Hold'em hand evaluator and betting round engine."""

from .cards import Card, CardSource, Deck, RANKS, SUIT_ORDER, SUITS, build_deck, deal, parse_cards, parse_label
from .evaluator import HandCategory, HandValue, ShowdownResult, compare_hands, compute_hand, evaluate_best
from .exceptions import (
    DeckExhaustedError,
    GameConfigError,
    GameOverError,
    HoldemError,
    InsufficientChipsError,
    InvalidActionError,
    RoundStateError,
)
from .game import GameEngine
from .models import Decision, Phase, Player, ResultType, RoundEntry, TableConfig
from .tables import TableManager

__all__ = [
    "Card",
    "CardSource",
    "Deck",
    "RANKS",
    "SUIT_ORDER",
    "SUITS",
    "build_deck",
    "deal",
    "parse_cards",
    "parse_label",
    "HandCategory",
    "HandValue",
    "ShowdownResult",
    "compare_hands",
    "compute_hand",
    "evaluate_best",
    "DeckExhaustedError",
    "GameConfigError",
    "GameOverError",
    "HoldemError",
    "InsufficientChipsError",
    "InvalidActionError",
    "RoundStateError",
    "GameEngine",
    "Decision",
    "Phase",
    "Player",
    "ResultType",
    "RoundEntry",
    "TableConfig",
    "TableManager",
]
