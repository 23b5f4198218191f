"""Drive whole rounds through the engine with a decision policy.

Each round follows the fixed legal order: start, one decision per pending
player, close the street, and so on until the community cards are complete,
then a final betting street and settlement.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Dict, Optional, Sequence

from .evaluator import ShowdownResult
from .exceptions import GameOverError, InsufficientChipsError
from .game import GameEngine
from .models import Decision, ResultType, TableConfig
from .strategies import Strategy, baseline_strategy

LOGGER = logging.getLogger(__name__)


def _act(engine: GameEngine, index: int, strategy: Strategy, rng: random.Random) -> None:
    decision, amount = strategy(engine, index, rng)
    try:
        if decision == Decision.RAISE:
            engine.raise_bet(index, amount or 0)
        elif decision == Decision.CALL:
            engine.call(index)
        else:
            engine.fold(index)
    except InsufficientChipsError:
        LOGGER.debug("Player %d cannot cover %s, folding", index, decision.value)
        engine.fold(index)


def _betting_street(engine: GameEngine, strategy: Strategy, rng: random.Random) -> None:
    for index in engine.pending_players():
        # Nobody left to bet against.
        if len(engine.contenders()) < 2:
            break
        _act(engine, index, strategy, rng)


def play_round(
    engine: GameEngine,
    strategy: Strategy = baseline_strategy,
    rng: Optional[random.Random] = None,
) -> ShowdownResult:
    rng = rng or random.Random()
    engine.start_round()
    while True:
        _betting_street(engine, strategy, rng)
        if engine.is_community_complete:
            break
        engine.end_street()
    return engine.settle()


def run_simulation(
    balances: Sequence[int],
    config: Optional[TableConfig] = None,
    rounds: int = 100,
    strategy: Optional[Strategy] = None,
    seed: Optional[int] = None,
) -> Dict[str, object]:
    engine = GameEngine(balances, config)
    rng = random.Random(seed)
    outcomes: Counter = Counter()
    played = 0

    for _ in range(rounds):
        try:
            result = play_round(engine, strategy or baseline_strategy, rng)
        except GameOverError:
            LOGGER.info("Game over after %d rounds", played)
            break
        played += 1
        outcomes[result.name if result.type == ResultType.WIN else ResultType.DRAW.value] += 1

    return {
        "rounds_played": played,
        "balances": [player.balance for player in engine.players],
        "outcomes": dict(outcomes),
        "game_over": not engine.can_start_round(),
    }
