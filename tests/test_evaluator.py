import itertools
import random

import pytest

from holdem.cards import Card, build_deck, parse_cards
from holdem.evaluator import (
    CATEGORY_TESTS,
    HandCategory,
    compute_hand,
    describe_rank,
    encode_value,
    evaluate_best,
    shape_of,
)


def test_evaluate_best_identifies_all_hand_categories():
    cases = [
        (HandCategory.STRAIGHT_FLUSH, ["9h", "Kh", "Qh", "Jh", "Th"]),
        (HandCategory.FOUR_OF_A_KIND, ["As", "Ah", "Ad", "Ac", "Kd"]),
        (HandCategory.FULL_HOUSE, ["Qc", "Qd", "Qs", "9h", "9s"]),
        (HandCategory.FLUSH, ["Ah", "Jh", "9h", "6h", "2h"]),
        (HandCategory.STRAIGHT, ["9h", "8d", "7c", "6s", "5h"]),
        (HandCategory.THREE_OF_A_KIND, ["8h", "8d", "8s", "Qd", "Js"]),
        (HandCategory.TWO_PAIR, ["7h", "7d", "4s", "4c", "As"]),
        (HandCategory.PAIR, ["6h", "6s", "Qh", "8d", "4c"]),
        (HandCategory.HIGH_CARD, ["As", "Kd", "Jh", "9c", "4d"]),
    ]

    for expected, labels in cases:
        hand = evaluate_best(parse_cards(labels))
        assert hand.category == expected, f"labels={labels}"
        assert describe_rank(hand) == expected.label


def test_evaluate_best_handles_wheel_straight():
    hand = evaluate_best(parse_cards(["Ah", "2d", "3c", "4s", "5h", "9d", "Kd"]))
    assert hand.category == HandCategory.STRAIGHT
    assert hand.kickers == (5,)


def test_six_high_straight_beats_wheel():
    wheel = evaluate_best(parse_cards(["Ah", "2d", "3c", "4s", "5h"]))
    six_high = evaluate_best(parse_cards(["6h", "2d", "3c", "4s", "5h"]))
    assert six_high > wheel


def test_wrap_around_is_not_a_straight():
    hand = evaluate_best(parse_cards(["Qh", "Kd", "Ac", "2s", "3h"]))
    assert hand.category == HandCategory.HIGH_CARD
    assert hand.kickers == (14, 13, 12, 3, 2)


def test_weakest_quads_beat_strongest_full_house():
    quads = evaluate_best(parse_cards(["2s", "2h", "2d", "2c", "3d"]))
    boat = evaluate_best(parse_cards(["As", "Ah", "Ad", "Kc", "Kd"]))
    assert quads > boat


def test_category_dominates_kickers_for_every_adjacent_pair():
    # Strongest hand of each category vs weakest hand of the next one up.
    strongest = [
        ["As", "Kd", "Qh", "Jc", "9d"],
        ["As", "Ad", "Kh", "Qc", "Jd"],
        ["As", "Ad", "Kh", "Kc", "Qd"],
        ["As", "Ad", "Ah", "Kc", "Qd"],
        ["As", "Kd", "Qh", "Jc", "Td"],
        ["As", "Ks", "Qs", "Js", "9s"],
        ["As", "Ad", "Ah", "Kc", "Kd"],
        ["As", "Ad", "Ah", "Ac", "Kd"],
    ]
    weakest = [
        ["2s", "2d", "3h", "4c", "5d"],
        ["2s", "2d", "3h", "3c", "4d"],
        ["2s", "2d", "2h", "3c", "4d"],
        ["As", "2d", "3h", "4c", "5d"],
        ["2s", "3s", "4s", "5s", "7s"],
        ["2s", "2d", "2h", "3c", "3d"],
        ["2s", "2d", "2h", "2c", "3d"],
        ["As", "2s", "3s", "4s", "5s"],
    ]
    for high, low in zip(strongest, weakest):
        assert evaluate_best(parse_cards(low)) > evaluate_best(parse_cards(high)), f"{low} vs {high}"


def test_kickers_break_ties_within_category():
    hand_a = evaluate_best(parse_cards(["Ah", "Ad", "Kc", "Qs", "9h", "2d", "3c"]))
    hand_b = evaluate_best(parse_cards(["Ah", "Ad", "Qc", "Js", "8h", "2d", "3c"]))
    assert hand_a > hand_b
    assert hand_a.kickers == (14, 13, 12, 9)


def test_two_pair_orders_pairs_then_kicker():
    hand = evaluate_best(parse_cards(["4s", "4c", "Kh", "Kd", "7s"]))
    assert hand.kickers == (13, 4, 7)
    better_kicker = evaluate_best(parse_cards(["4s", "4c", "Kh", "Kd", "9s"]))
    assert better_kicker > hand


def test_full_house_uses_trips_then_pair():
    hand = evaluate_best(parse_cards(["3s", "3c", "3h", "Kd", "Ks"]))
    assert hand.kickers == (3, 13)
    assert evaluate_best(parse_cards(["4s", "4c", "4h", "2d", "2s"])) > hand


def test_royal_flush_is_named_but_ordered_as_straight_flush():
    royal = evaluate_best(parse_cards(["As", "Ks", "Qs", "Js", "Ts"]))
    king_high = evaluate_best(parse_cards(["9s", "Ks", "Qs", "Js", "Ts"]))
    assert royal.category == HandCategory.STRAIGHT_FLUSH
    assert royal.name == "royal_flush"
    assert king_high.name == "straight_flush"
    assert royal > king_high


def test_value_matches_lexicographic_category_and_kickers():
    deck = build_deck(seed=5)
    rng = random.Random(5)
    hands = [evaluate_best(rng.sample(deck, 7)) for _ in range(200)]
    for a, b in itertools.combinations(hands, 2):
        by_key = (a.category, a.kickers) > (b.category, b.kickers)
        assert (a > b) == by_key
        assert (a == b) == ((a.category, a.kickers) == (b.category, b.kickers))


def test_every_five_card_hand_matches_exactly_one_category():
    deck = build_deck(seed=11)
    rng = random.Random(11)
    samples = [rng.sample(deck, 5) for _ in range(3000)]
    # Make sure the rare categories are covered too.
    samples += [
        parse_cards(labels)
        for labels in (
            ["As", "Ks", "Qs", "Js", "Ts"],
            ["As", "2s", "3s", "4s", "5s"],
            ["7s", "7h", "7d", "7c", "2d"],
            ["7s", "7h", "7d", "2c", "2d"],
            ["As", "2d", "3h", "4c", "5d"],
        )
    ]
    for cards in samples:
        shape = shape_of(cards)
        matches = [category for category, test in CATEGORY_TESTS if test(shape) is not None]
        assert len(matches) == 1, f"{[card.label for card in cards]} -> {matches}"


def test_best_of_seven_picks_the_strongest_subset():
    cards = parse_cards(["2h", "2d", "Ah", "Kh", "Qh", "Jh", "Th"])
    hand = evaluate_best(cards)
    assert hand.name == "royal_flush"
    assert set(card.label for card in hand.cards) == {"Ah", "Kh", "Qh", "Jh", "Th"}


def test_two_hole_cards_rank_as_partial_hand():
    pocket_aces = compute_hand(parse_cards(["As", "Ad"]), parse_cards(["As", "Ad"]))
    ace_king = compute_hand(parse_cards(["As", "Kd"]), parse_cards(["As", "Kd"]))
    assert pocket_aces.category == HandCategory.PAIR
    assert ace_king.category == HandCategory.HIGH_CARD
    assert pocket_aces > ace_king


def test_main_cards_anchor_the_combinations():
    board = parse_cards(["As", "Ks", "Qs", "Js", "Ts"])
    hole = parse_cards(["2c", "7d"])
    anchored = compute_hand(board + hole, hole)
    # The board royal flush is out of reach without one of the hole cards.
    assert anchored.category != HandCategory.STRAIGHT_FLUSH
    assert any(card in hole for card in anchored.cards)
    assert compute_hand(board + hole, board + hole).name == "royal_flush"


def test_encode_value_pads_missing_kickers():
    assert encode_value(HandCategory.PAIR, (14,)) == encode_value(HandCategory.PAIR, (14, 0, 0, 0, 0))
    assert encode_value(HandCategory.PAIR, (2,)) > encode_value(HandCategory.HIGH_CARD, (14, 13, 12, 11, 9))


def test_card_validation_rejects_invalid_input():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card(1, "h")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card(14, "x")
    with pytest.raises(ValueError, match="Invalid rank"):
        parse_cards(["1h"])
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_cards(["10h"])


def test_parse_cards_and_evaluate_supports_multiple_seven_card_hands():
    deck = build_deck(seed=777)
    for idx in range(0, 42, 7):
        hand = evaluate_best(deck[idx : idx + 7])
        assert HandCategory.HIGH_CARD <= hand.category <= HandCategory.STRAIGHT_FLUSH
        assert len(hand.cards) == 5
