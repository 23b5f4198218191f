from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, CardSource, Deck, cards_to_labels
from .evaluator import HandValue, ShowdownResult, compare_hands, compute_hand
from .exceptions import (
    GameConfigError,
    GameOverError,
    InsufficientChipsError,
    InvalidActionError,
    RoundStateError,
)
from .models import Decision, Phase, Player, ResultType, RoundEntry, TableConfig

LOGGER = logging.getLogger(__name__)

# GameEngine keeps all table state in memory. No networking lives here, only
# betting decisions, chip accounting and showdown settlement.

HOLE_CARDS = 2
DECK_SIZE = 52


class GameEngine:
    """Betting round state machine for a single table.

    Operations must be issued in order: ``start_round``, then any number of
    ``raise_bet``/``call``/``fold`` per street, ``end_street`` to close a
    street and reveal community cards, and finally ``settle``. Every check
    runs before any mutation, so a rejected call leaves the table unchanged.
    """

    def __init__(
        self,
        balances: Sequence[int],
        config: Optional[TableConfig] = None,
        deck: Optional[CardSource] = None,
    ) -> None:
        self.config = config or TableConfig()
        if HOLE_CARDS * len(balances) + self.config.community_cap > DECK_SIZE:
            raise GameConfigError("Too many players for a single deck")
        self.deck: CardSource = deck if deck is not None else Deck(self.config.seed)
        self._players: List[Player] = [Player(index=idx, balance=balance) for idx, balance in enumerate(balances)]
        self._round: List[RoundEntry] = []
        self._community: List[Card] = []
        self._pot = 0
        self._phase = Phase.DEALT
        self._streets_closed = 0
        self.round_counter = 0
        self._new_round()

    # Read-only views -------------------------------------------------

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players)

    @property
    def round(self) -> Tuple[RoundEntry, ...]:
        return tuple(self._round)

    @property
    def community(self) -> Tuple[Card, ...]:
        return tuple(self._community)

    @property
    def pot(self) -> int:
        return self._pot

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def streets_closed(self) -> int:
        return self._streets_closed

    @property
    def is_round_active(self) -> bool:
        return bool(self._round)

    @property
    def is_community_complete(self) -> bool:
        return len(self._community) >= self.config.community_cap

    def contenders(self) -> List[int]:
        return [player.index for player in self._players if player.active and not player.folded]

    def pending_players(self) -> List[int]:
        """Players who still owe a decision on the current street."""
        if not self._round:
            return []
        return [idx for idx in self.contenders() if self._round[idx].decision is None]

    def high_bet(self) -> int:
        return max((entry.committed for entry in self._round), default=0)

    def can_start_round(self) -> bool:
        return sum(1 for player in self._players if player.balance >= 0) >= 2

    def compute_hand(self, cards: Sequence[Card]) -> HandValue:
        """Best value of ``cards`` on their own; community cards are ignored."""
        return compute_hand(cards, cards)

    # Round lifecycle -------------------------------------------------

    def _deal_hole_cards(self) -> List[List[Card]]:
        self.deck.shuffle()
        return [self.deck.draw(HOLE_CARDS) for _ in self._players]

    def _new_round(self, hole_cards: Optional[List[List[Card]]] = None) -> None:
        if hole_cards is None:
            hole_cards = self._deal_hole_cards()
        for player, cards in zip(self._players, hole_cards):
            player.reset_for_round(cards)
        self._round = []
        self._community = []
        self._pot = 0
        self._streets_closed = 0
        self._phase = Phase.DEALT
        self.round_counter += 1

    def start_round(self) -> None:
        if self._round:
            raise RoundStateError("Round already in progress")

        eligible = [player.balance >= 0 for player in self._players]
        if sum(eligible) < 2:
            raise GameOverError("Game cannot continue")

        for player, active in zip(self._players, eligible):
            player.active = active
        # Every active player antes the minimum bet.
        self._round = [
            RoundEntry(committed=self.config.min_bet if player.active else 0) for player in self._players
        ]
        self._phase = Phase.BETTING
        LOGGER.info("Round %d started with %d active players", self.round_counter, sum(eligible))

    def _acting(self, index: int) -> Tuple[Player, RoundEntry]:
        if not self._round:
            raise RoundStateError("Game round not started")
        if not 0 <= index < len(self._players):
            raise InvalidActionError(f"Unknown player {index}")
        player = self._players[index]
        if not player.active:
            raise RoundStateError("Player not dealt into this round")
        if player.folded:
            raise RoundStateError("Player has folded")
        entry = self._round[index]
        if entry.decision is not None:
            raise RoundStateError("Decision already recorded this street")
        return player, entry

    # Action handling -------------------------------------------------

    def raise_bet(self, index: int, amount: int) -> None:
        player, entry = self._acting(index)
        if amount < 0:
            raise InvalidActionError("Raise amount must not be negative")
        if amount > player.balance:
            raise InsufficientChipsError("Raise exceeds balance")
        # The minimum raise is left to the caller.
        entry.committed = amount
        entry.decision = Decision.RAISE
        self._phase = Phase.BETTING
        LOGGER.debug("Player %d raises to %d", index, amount)

    def call(self, index: int) -> None:
        player, entry = self._acting(index)
        if self.config.match_calls:
            target = self.high_bet()
            if target > player.balance:
                raise InsufficientChipsError("Call exceeds balance")
            entry.committed = max(entry.committed, target)
        entry.decision = Decision.CALL
        self._phase = Phase.BETTING
        LOGGER.debug("Player %d calls (committed %d)", index, entry.committed)

    def fold(self, index: int) -> None:
        player, entry = self._acting(index)
        # Extra guard on top of the usual fold rules: the pot must keep a claimant.
        if self.contenders() == [index]:
            raise RoundStateError("Last remaining player cannot fold")
        entry.decision = Decision.FOLD
        player.folded = True
        self._phase = Phase.BETTING
        LOGGER.debug("Player %d folds", index)

    def _sweep(self) -> None:
        for player, entry in zip(self._players, self._round):
            player.balance -= entry.committed
            player.total_in_pot += entry.committed
            self._pot += entry.committed
            entry.committed = 0

    def end_street(self) -> List[Card]:
        """Move every commitment into the pot and reveal the next community cards."""
        if not self._round:
            raise RoundStateError("Game round not started")
        remaining = self.config.community_cap - len(self._community)
        if remaining <= 0:
            raise RoundStateError("Round is over, please settle")

        cards = self.deck.draw(min(self.config.reveal_per_street, remaining))
        self._sweep()
        self._round = [RoundEntry() for _ in self._players]
        self._community.extend(cards)
        self._streets_closed += 1
        self._phase = Phase.STREET_CLOSED
        LOGGER.debug("Street %d closed, pot %d, revealed %s", self._streets_closed, self._pot, cards_to_labels(cards))
        return cards

    def settle(self) -> ShowdownResult:
        """Award the pot at showdown and deal the next round."""
        if not self._round:
            raise RoundStateError("Game round not started")
        if self._streets_closed == 0:
            raise RoundStateError("No street has closed yet")

        contenders = self.contenders()
        showdown = compare_hands([self._players[idx].hole_cards for idx in contenders], self._community)
        tied = tuple(contenders[idx] for idx in showdown.tied)
        # Money committed after the last reveal still belongs in the pot.
        pot = self._pot + sum(entry.committed for entry in self._round)
        if showdown.type == ResultType.WIN:
            assert showdown.index is not None
            winner = contenders[showdown.index]
            result = replace(showdown, index=winner, tied=tied, players=tuple(contenders))
            payouts = {winner: pot}
        else:
            result = replace(showdown, tied=tied, players=tuple(contenders))
            payouts = self._split_pot(pot, contenders)

        # Deal before touching balances so a failing card source leaves the round intact.
        hole_cards = self._deal_hole_cards()
        self._sweep()
        for idx, amount in payouts.items():
            self._players[idx].balance += amount
        if result.type == ResultType.WIN:
            LOGGER.info("Player %d wins %d with %s", result.index, pot, result.name)
        else:
            LOGGER.info("Draw between %s, pot %d split %d ways", list(result.tied), pot, len(contenders))

        self._new_round(hole_cards)
        return result

    def _split_pot(self, pot: int, claimants: Sequence[int]) -> Dict[int, int]:
        # Folded players gave up their claim, even on a draw.
        share, remainder = divmod(pot, len(claimants))
        return {idx: share + (1 if order < remainder else 0) for order, idx in enumerate(sorted(claimants))}

    # Snapshot helpers ------------------------------------------------

    def snapshot(self) -> Dict[str, object]:
        players = []
        for player in self._players:
            entry = self._round[player.index] if self._round else None
            players.append(
                {
                    "index": player.index,
                    "balance": player.balance,
                    "hole": cards_to_labels(player.hole_cards),
                    "folded": player.folded,
                    "active": player.active,
                    "committed": entry.committed if entry else 0,
                    "decision": entry.decision.value if entry and entry.decision else None,
                }
            )
        return {
            "round": self.round_counter,
            "phase": self._phase.value,
            "pot": self._pot,
            "community": cards_to_labels(self._community),
            "players": players,
        }
