from __future__ import annotations

import random
from typing import Callable, Optional, Tuple

from .evaluator import HandCategory
from .game import GameEngine
from .models import Decision

Strategy = Callable[[GameEngine, int, random.Random], Tuple[Decision, Optional[int]]]


def _hand_strength(engine: GameEngine, index: int) -> int:
    """Very rough proxy for hand quality used to drive aggression choices."""
    player = engine.players[index]
    hand = engine.compute_hand(list(player.hole_cards) + list(engine.community))
    top = hand.kickers[0] if hand.kickers else 0
    return int(hand.category) * 10 + top


def _should_raise(strength: int, streets_closed: int, rng: random.Random) -> bool:
    # Always attack with two pair or better.
    if strength >= int(HandCategory.TWO_PAIR) * 10:
        return True
    base = 0.1 + 0.03 * streets_closed
    scaled_strength = min(strength / 60.0, 0.4)
    return rng.random() < min(0.75, base + scaled_strength)


def _choose_raise_amount(engine: GameEngine, index: int, rng: random.Random) -> Optional[int]:
    balance = engine.players[index].balance
    target = engine.high_bet() + engine.config.min_bet
    if target > balance:
        return None
    if rng.random() < 0.2:
        return balance
    return target


def baseline_strategy(engine: GameEngine, index: int, rng: random.Random) -> Tuple[Decision, Optional[int]]:
    """Demo policy: raises strong holdings, calls what it can afford, folds the rest."""
    strength = _hand_strength(engine, index)

    if _should_raise(strength, engine.streets_closed, rng):
        amount = _choose_raise_amount(engine, index, rng)
        if amount is not None:
            return Decision.RAISE, amount

    if engine.high_bet() <= engine.players[index].balance:
        return Decision.CALL, None

    return Decision.FOLD, None


def passive_strategy(engine: GameEngine, index: int, rng: random.Random) -> Tuple[Decision, Optional[int]]:
    """Calls every street; used to check draws down to showdown."""
    return Decision.CALL, None
