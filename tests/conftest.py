import random

import pytest

from models import Card, Rank, Suit


def card(label: str, face_up: bool = True) -> Card:
    """Build a card from a short label like 'KS', '10H', 'AD'."""
    suits = {"S": Suit.SPADE, "H": Suit.HEART, "C": Suit.CLUB, "D": Suit.DIAMOND}
    ranks = {"A": 1, "J": 11, "Q": 12, "K": 13}
    rank_part, suit_part = label[:-1], label[-1]
    rank = ranks.get(rank_part) or int(rank_part)
    return Card(suits[suit_part], Rank(rank), face_up)


def down(label: str) -> Card:
    return card(label, face_up=False)


@pytest.fixture
def rng():
    return random.Random(1234)


class FirstIndexRng:
    """Always picks index 0, which turns the shuffle into a left rotation by one."""

    def randrange(self, m):
        return 0
