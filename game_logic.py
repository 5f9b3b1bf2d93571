"""
Core card mechanics: deck, shuffle, deal, stacking rules and run moves.
"""

import logging
import random
from typing import List, Optional

from config import DECK_SIZE, NUM_COLUMNS
from models import (
    Card,
    Column,
    Foundations,
    InvariantViolation,
    Rank,
    SimulationState,
    Suit,
    empty_foundations,
)

logger = logging.getLogger(__name__)


def create_deck() -> List[Card]:
    """All 52 suit/rank pairs, face down. Order is irrelevant, it is always shuffled."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle_cards(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Fisher-Yates shuffle, in place.
    `rng` is any object with `randrange` (e.g. random.Random); defaults to the
    module-level generator. Returns the same list for convenience.
    """
    rng = rng or random
    m = len(cards)
    while m:
        i = rng.randrange(m)
        m -= 1
        cards[m], cards[i] = cards[i], cards[m]
    return cards


def deal(cards: List[Card]) -> SimulationState:
    """
    Lay a shuffled deck out as a triangular tableau.
    Cards are popped from the end of `cards`; column i gets i+1 cards and only
    the last one dealt into it is face up. Whatever is left becomes the hand.
    """
    tableau = [[] for _ in range(NUM_COLUMNS)]
    for i, column in enumerate(tableau):
        for remaining in range(i, -1, -1):
            card = cards.pop()
            card.face_up = remaining == 0
            column.append(card)

    hand = cards[:]
    for card in hand:
        card.face_up = False
    return SimulationState(tableau=tableau, foundations=empty_foundations(), hand=hand)


def new_game(rng: Optional[random.Random] = None) -> SimulationState:
    """Deck -> shuffle -> deal."""
    state = deal(shuffle_cards(create_deck(), rng))
    logger.debug("Dealt new game, %d cards in hand", len(state.hand))
    return state


def is_black(card: Card) -> bool:
    """Spades and clubs are black."""
    return card.suit in (Suit.SPADE, Suit.CLUB)


def same_color(a: Card, b: Card) -> bool:
    """True if both cards are black or both are red."""
    return is_black(a) == is_black(b)


def is_descending_adjacent(upper: Card, lower: Card) -> bool:
    """True if `lower` is exactly one rank below `upper`."""
    return upper.rank - 1 == lower.rank


def can_stack(target_top: Card, moving: Card) -> bool:
    """Tableau rule: opposite color, one rank lower."""
    return not same_color(target_top, moving) and is_descending_adjacent(target_top, moving)


def can_foundation(pile: List[Card], moving: Card, suit: Suit) -> bool:
    """
    Foundation rule for the `suit` pile: the card must be of that suit, an
    empty pile takes only the Ace, otherwise the next rank up.
    """
    if moving.suit != suit:
        return False
    if not pile:
        return moving.rank == Rank.ACE
    return pile[-1].rank + 1 == moving.rank


def move_suffix(source: Column, start: int, target: Column) -> List[Card]:
    """Truncate `source` at `start` and append the removed run to `target`."""
    run = source[start:]
    del source[start:]
    target.extend(run)
    return run


def mark_top_face_up(column: Column) -> None:
    """Turn over the top card of a column, if there is one."""
    if column:
        column[-1].face_up = True


def run_start(column: Column) -> int:
    """
    Index of the first face-up card from the bottom of a non-empty column.
    A column with nothing face up gets its top card turned over and that
    card is used as the run start.
    """
    for idx, card in enumerate(column):
        if card.face_up:
            return idx
    mark_top_face_up(column)
    logger.debug("No exposed card in column, turned over %s", column[-1])
    return len(column) - 1


def foundation_for(foundations: Foundations, card: Card) -> List[Card]:
    """The foundation pile for the card's suit."""
    return foundations[card.suit]


def check_invariants(state: SimulationState) -> None:
    """
    Raise InvariantViolation if the board could not have come out of the
    heuristics: foundations built up by suit from the Ace, face-up cards a
    contiguous descending alternating-color suffix, 52 cards in play.
    """
    for suit, pile in state.foundations.items():
        for pos, card in enumerate(pile):
            if card.suit != suit:
                raise InvariantViolation(f"{card} on the {suit.label} foundation")
            if card.rank != pos + 1:
                raise InvariantViolation(
                    f"{suit.label} foundation out of order at position {pos}: {card}"
                )

    for col_idx, column in enumerate(state.tableau):
        exposed = [idx for idx, card in enumerate(column) if card.face_up]
        if not exposed:
            continue
        first = exposed[0]
        if exposed != list(range(first, len(column))):
            raise InvariantViolation(f"Column {col_idx} has a non-contiguous exposed run")
        for upper, lower in zip(column[first:], column[first + 1:]):
            if not can_stack(upper, lower):
                raise InvariantViolation(
                    f"Column {col_idx} exposed run breaks at {upper} -> {lower}"
                )

    count = state.card_count()
    if count != DECK_SIZE:
        raise InvariantViolation(f"{count} cards in play, expected {DECK_SIZE}")


def is_cleared(state: SimulationState) -> bool:
    """Every card reached the foundations."""
    return not state.hand and all(not column for column in state.tableau)
