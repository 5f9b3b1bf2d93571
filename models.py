"""
Data models and state representations.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List

from config import RANK_LABELS, SUIT_NAMES, SUIT_SYMBOLS


class Suit(IntEnum):
    """Card suits, numbered as on the original board."""
    SPADE = 1
    HEART = 2
    CLUB = 3
    DIAMOND = 4

    @property
    def symbol(self) -> str:
        """Suit glyph shown on the board."""
        return SUIT_SYMBOLS[self.value]

    @property
    def label(self) -> str:
        return SUIT_NAMES[self.value]


class Rank(IntEnum):
    """Card ranks, Ace low."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return RANK_LABELS[self.value]


class Outcome(Enum):
    """How a stuck game ended."""
    WIN = "win"
    LOSS = "loss"


class InvariantViolation(Exception):
    """A board state that the heuristics can never legally produce."""


@dataclass
class Card:
    """A playing card. Only `face_up` changes after creation."""
    suit: Suit
    rank: Rank
    face_up: bool = False

    def copy(self) -> "Card":
        """Independent copy, so face_up changes do not leak."""
        return Card(self.suit, self.rank, self.face_up)

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"


Column = List[Card]
Tableau = List[Column]
Foundations = Dict[Suit, List[Card]]


def empty_foundations() -> Foundations:
    """One empty pile per suit."""
    return {suit: [] for suit in Suit}


@dataclass
class SimulationState:
    """One full board: tableau, foundation piles and the reserve hand."""
    tableau: Tableau
    foundations: Foundations = field(default_factory=empty_foundations)
    hand: List[Card] = field(default_factory=list)

    def clone(self) -> "SimulationState":
        """Deep copy of the board, cards included."""
        return SimulationState(
            tableau=[[c.copy() for c in col] for col in self.tableau],
            foundations={s: [c.copy() for c in pile] for s, pile in self.foundations.items()},
            hand=[c.copy() for c in self.hand],
        )

    def card_count(self) -> int:
        """Cards in the tableau, foundations and hand together."""
        return (
            sum(len(col) for col in self.tableau)
            + sum(len(pile) for pile in self.foundations.values())
            + len(self.hand)
        )


@dataclass
class Stats:
    """Win/loss counters for every game a driver has classified."""
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_ratio(self) -> float:
        return self.wins / max(self.games, 1)

    def record(self, outcome: Outcome) -> None:
        """Count one finished game."""
        if outcome is Outcome.WIN:
            self.wins += 1
        else:
            self.losses += 1


@dataclass
class GameRecord:
    """Outcome and length of one finished game."""
    game: int
    ticks: int
    outcome: Outcome
