from __future__ import annotations

import itertools
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .cards import SUIT_ORDER, Card, cards_to_labels
from .models import ResultType

# Ranks top out at 14, so base 15 keeps every tie-break slot independent.
_BASE = 15
_SLOTS = 5


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, order=True)
class HandValue:
    """Best combination found for a pool of cards. Ordered by ``value`` alone."""

    value: int
    category: HandCategory = field(compare=False)
    kickers: Tuple[int, ...] = field(compare=False)
    cards: Tuple[Card, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        if self.category == HandCategory.STRAIGHT_FLUSH and self.kickers[0] == 14:
            return "royal_flush"
        return self.category.label


class HandShape(NamedTuple):
    ranks: Tuple[int, ...]
    groups: Tuple[Tuple[int, int], ...]  # (count, rank), biggest group first
    is_flush: bool
    straight_high: Optional[int]

    @property
    def counts(self) -> Tuple[int, ...]:
        return tuple(count for count, _ in self.groups)

    def kickers(self, *exclude: int) -> Tuple[int, ...]:
        return tuple(rank for rank in self.ranks if rank not in exclude)


def shape_of(cards: Sequence[Card]) -> HandShape:
    ranks = tuple(sorted((card.rank for card in cards), reverse=True))
    counts = Counter(ranks)
    groups = tuple(sorted(((count, rank) for rank, count in counts.items()), reverse=True))
    # Straights and flushes need a full five cards.
    complete = len(cards) == 5
    is_flush = complete and len({card.suit for card in cards}) == 1
    straight_high = _straight_high(ranks) if complete else None
    return HandShape(ranks, groups, is_flush, straight_high)


def _straight_high(ranks: Sequence[int]) -> Optional[int]:
    values = set(ranks)
    if len(values) != 5:
        return None
    if 14 in values:  # Ace low
        values.add(1)
    ordered = sorted(values, reverse=True)
    for idx in range(len(ordered) - 4):
        window = ordered[idx : idx + 5]
        if window[0] - window[4] == 4:
            return window[0]
    return None


# Category tests. Each returns the tie-break key on a match, None otherwise.

def _straight_flush(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.is_flush and shape.straight_high is not None:
        return (shape.straight_high,)
    return None


def _four_of_a_kind(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[0] != 4:
        return None
    quad = shape.groups[0][1]
    return (quad,) + shape.kickers(quad)


def _full_house(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[:2] != (3, 2):
        return None
    return (shape.groups[0][1], shape.groups[1][1])


def _flush(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.is_flush and shape.straight_high is None:
        return shape.ranks
    return None


def _straight(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.straight_high is not None and not shape.is_flush:
        return (shape.straight_high,)
    return None


def _three_of_a_kind(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[0] != 3 or shape.counts[1:2] == (2,):
        return None
    trips = shape.groups[0][1]
    return (trips,) + shape.kickers(trips)


def _two_pair(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[:2] != (2, 2):
        return None
    pair_high = shape.groups[0][1]
    pair_low = shape.groups[1][1]
    return (pair_high, pair_low) + shape.kickers(pair_high, pair_low)


def _pair(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[0] != 2 or shape.counts[1:2] == (2,):
        return None
    pair = shape.groups[0][1]
    return (pair,) + shape.kickers(pair)


def _high_card(shape: HandShape) -> Optional[Tuple[int, ...]]:
    if shape.counts[0] != 1 or shape.is_flush or shape.straight_high is not None:
        return None
    return shape.ranks


CategoryTest = Callable[[HandShape], Optional[Tuple[int, ...]]]

CATEGORY_TESTS: Tuple[Tuple[HandCategory, CategoryTest], ...] = (
    (HandCategory.STRAIGHT_FLUSH, _straight_flush),
    (HandCategory.FOUR_OF_A_KIND, _four_of_a_kind),
    (HandCategory.FULL_HOUSE, _full_house),
    (HandCategory.FLUSH, _flush),
    (HandCategory.STRAIGHT, _straight),
    (HandCategory.THREE_OF_A_KIND, _three_of_a_kind),
    (HandCategory.TWO_PAIR, _two_pair),
    (HandCategory.PAIR, _pair),
    (HandCategory.HIGH_CARD, _high_card),
)


def encode_value(category: HandCategory, kickers: Sequence[int]) -> int:
    value = int(category)
    padded = list(kickers) + [0] * (_SLOTS - len(kickers))
    for rank in padded:
        value = value * _BASE + rank
    return value


def _score(cards: Sequence[Card]) -> HandValue:
    shape = shape_of(cards)
    for category, test in CATEGORY_TESTS:
        kickers = test(shape)
        if kickers is not None:
            return HandValue(encode_value(category, kickers), category, kickers, tuple(cards))
    raise AssertionError(f"No category matched {cards_to_labels(cards)}")


def compute_hand(all_cards: Sequence[Card], main_cards: Optional[Sequence[Card]] = None) -> HandValue:
    """Return the best value reachable from ``all_cards``.

    Every 5-card combination of the pool is scored (or the whole pool when it
    holds fewer than five cards). When ``main_cards`` is given, only
    combinations holding at least one of them are eligible; passing the same
    cards for both arguments imposes no restriction.
    """
    anchors = set(main_cards or ())
    pool = list(dict.fromkeys([*all_cards, *(main_cards or ())]))
    size = min(5, len(pool))

    best: Optional[HandValue] = None
    for combo in itertools.combinations(pool, size):
        if anchors and anchors.isdisjoint(combo):
            continue
        rank = _score(combo)
        if best is None or rank > best:
            best = rank
    assert best is not None
    return best


def evaluate_best(cards: Sequence[Card]) -> HandValue:
    """Return the strongest hand for up to 7 cards (Texas Hold'em). Higher is better."""
    return compute_hand(cards, cards)


def describe_rank(hand: HandValue) -> str:
    return hand.name


@dataclass(frozen=True)
class ShowdownResult:
    type: ResultType
    index: Optional[int] = None
    name: Optional[str] = None
    # Decisive card of a high-card win; ``tied`` then lists the leaders its suit split.
    suit: Optional[str] = None
    value: Optional[int] = None
    tied: Tuple[int, ...] = ()
    hands: Tuple[HandValue, ...] = ()
    # Player indices the entries of ``hands`` belong to.
    players: Tuple[int, ...] = ()

    def to_payload(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"type": self.type.value}
        if self.type == ResultType.WIN:
            payload["index"] = self.index
            payload["name"] = self.name
            if self.suit is not None:
                payload["suit"] = self.suit
                payload["value"] = self.value
        else:
            payload["tied"] = list(self.tied)
        return payload


def _card_key(card: Card) -> Tuple[int, int]:
    return card.rank, SUIT_ORDER.index(card.suit)


def _decisive_order(value: HandValue, hole: Sequence[Card]) -> List[Card]:
    # Best five first, then the player's own cards, each strongest first.
    ranked = sorted(value.cards, key=_card_key, reverse=True)
    return ranked + sorted(hole, key=_card_key, reverse=True)


def _first_difference(cards: Sequence[Card], other: Sequence[Card]) -> Card:
    for card, rival in zip(cards, other):
        if _card_key(card) != _card_key(rival):
            return card
    return cards[0]


def compare_hands(hands: Sequence[Sequence[Card]], community: Sequence[Card]) -> ShowdownResult:
    """Rank every player's best hand and name the single winner, or a draw.

    A high-card win also reports the decisive card: the winner's first card
    that differs from the runner-up's, walking both best hands and then both
    hole pairs from the top. High-card hands of equal value are split by that
    card's suit (see ``SUIT_ORDER``); every other tie is a draw.
    """
    if not hands:
        raise ValueError("compare_hands requires at least one hand")

    board = list(community)
    values: List[HandValue] = []
    for hand in hands:
        cards = list(hand) + board
        values.append(compute_hand(cards, cards))

    best = max(values)
    leaders = tuple(idx for idx, value in enumerate(values) if value == best)
    players = tuple(range(len(values)))
    if best.category != HandCategory.HIGH_CARD:
        if len(leaders) > 1:
            return ShowdownResult(type=ResultType.DRAW, tied=leaders, hands=tuple(values), players=players)
        return ShowdownResult(
            type=ResultType.WIN, index=leaders[0], name=best.name, hands=tuple(values), players=players
        )

    orders = [[_card_key(card) for card in _decisive_order(value, hand)] for value, hand in zip(values, hands)]
    top_order = max(orders[idx] for idx in leaders)
    winners = tuple(idx for idx in leaders if orders[idx] == top_order)
    if len(winners) > 1:
        return ShowdownResult(type=ResultType.DRAW, tied=winners, hands=tuple(values), players=players)

    winner = winners[0]
    decisive_cards = _decisive_order(values[winner], hands[winner])
    others = [idx for idx in players if idx != winner]
    if others:
        runner_up = max(others, key=lambda idx: (values[idx], orders[idx]))
        decisive = _first_difference(decisive_cards, _decisive_order(values[runner_up], hands[runner_up]))
    else:
        decisive = decisive_cards[0]
    return ShowdownResult(
        type=ResultType.WIN,
        index=winner,
        name=best.name,
        suit=decisive.suit,
        value=decisive.rank,
        tied=leaders if len(leaders) > 1 else (),
        hands=tuple(values),
        players=players,
    )
