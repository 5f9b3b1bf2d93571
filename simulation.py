"""
Autoplay heuristics, the tick driver and batch simulation.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

from config import CHECK_INVARIANTS, MAX_TICKS_PER_GAME, REFRESH_INTERVAL_MS
from models import (
    Card,
    Foundations,
    GameRecord,
    Outcome,
    Rank,
    SimulationState,
    Stats,
    Tableau,
)
from analytics import stats_summary
from game_logic import (
    can_foundation,
    can_stack,
    check_invariants,
    foundation_for,
    is_cleared,
    mark_top_face_up,
    move_suffix,
    new_game,
    run_start,
)

logger = logging.getLogger(__name__)

Renderer = Callable[[Tableau, Foundations, List[Card]], None]


def balance_tableau(tableau: Tableau) -> None:
    """
    Grow the exposed runs together to uncover hidden cards.

    Columns are visited right to left so the tallest hidden stacks are worked
    on first. Each column's exposed run moves, at most once, to the first
    other column (left to right) that either:
      - is empty, when the run starts with a King that still has cards under
        it (a King already at the bottom of its column stays put), or
      - has a top card the run's bottom card can stack on.
    """
    for i in range(len(tableau) - 1, -1, -1):
        source = tableau[i]
        if not source:
            continue
        start = run_start(source)
        bottom = source[start]

        for j, target in enumerate(tableau):
            if j == i:
                continue
            if not target:
                if bottom.rank == Rank.KING and start != 0:
                    move_suffix(source, start, target)
                    break
            elif can_stack(target[-1], bottom):
                move_suffix(source, start, target)
                mark_top_face_up(source)
                break


def promote_to_foundations(tableau: Tableau, foundations: Foundations) -> None:
    """Move each column's top card to its foundation pile when it fits there."""
    for i in range(len(tableau) - 1, -1, -1):
        column = tableau[i]
        if not column:
            continue
        top = column[-1]
        pile = foundation_for(foundations, top)
        if can_foundation(pile, top, top.suit):
            pile.append(column.pop())
            mark_top_face_up(column)


def _place_on_tableau(tableau: Tableau, card: Card) -> Optional[int]:
    """First column that takes `card`: a King on an empty column, else a stackable top."""
    for i, column in enumerate(tableau):
        if not column:
            if card.rank == Rank.KING:
                return i
            continue
        if can_stack(column[-1], card):
            return i
    return None


def dispatch_hand(tableau: Tableau, hand: List[Card], foundations: Foundations) -> None:
    """
    Try every reserve card, last one first: tableau placement before the
    foundations. Cards that fit nowhere stay in the hand.
    """
    for idx in range(len(hand) - 1, -1, -1):
        card = hand[idx]
        col = _place_on_tableau(tableau, card)
        if col is not None:
            card.face_up = True
            tableau[col].append(hand.pop(idx))
            continue

        pile = foundation_for(foundations, card)
        if can_foundation(pile, card, card.suit):
            card.face_up = True
            pile.append(hand.pop(idx))


def classify(state: SimulationState) -> Outcome:
    """A stuck board is a win only if every card made it to the foundations."""
    return Outcome.WIN if is_cleared(state) else Outcome.LOSS


class Driver:
    """
    Owns one board and the running stats.

    `tick()` runs a single step and is independent of any timer: a UI
    scheduler, a test or a batch loop may call it. `stopped` and
    `interval_ms` only describe how a scheduler should call it.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        renderer: Optional[Renderer] = None,
        interval_ms: int = REFRESH_INTERVAL_MS,
        check_invariants: bool = CHECK_INVARIANTS,
    ):
        self.rng = rng or random.Random()
        self.renderer = renderer
        self.check_invariants = check_invariants
        self.interval_ms = REFRESH_INTERVAL_MS
        self.set_speed(interval_ms)
        self.stopped = False

        self.state: Optional[SimulationState] = None
        self.stats = Stats()
        self.history: List[GameRecord] = []
        self.ticks_in_game = 0

    def toggle_stop(self) -> None:
        """Stop or resume scheduled ticks; the board is left as it is."""
        self.stopped = not self.stopped
        logger.info("Autoplay %s", "stopped" if self.stopped else "resumed")

    def set_speed(self, interval_ms: int) -> None:
        """Change the tick interval in milliseconds."""
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"Tick interval must be a positive integer, got {interval_ms!r}")
        self.interval_ms = interval_ms

    def scheduled_interval(self) -> Optional[float]:
        """Seconds between ticks, or None while stopped."""
        return None if self.stopped else self.interval_ms / 1000

    def render(self) -> None:
        """Hand the current board to the renderer without changing it."""
        if self.renderer is not None and self.state is not None:
            self.renderer(self.state.tableau, self.state.foundations, self.state.hand)

    def new_game(self) -> None:
        """Deal a fresh board and show it."""
        self.state = new_game(self.rng)
        self.ticks_in_game = 0
        self.render()

    def tick(self) -> Optional[Outcome]:
        """
        One step: balance, dispatch hand, promote, render, then check whether
        anything changed. An unchanged board ends the game, which is recorded
        and replaced by a fresh deal. Returns the outcome of a finished game.
        """
        if self.state is None:
            self.new_game()
            return None

        state = self.state
        before = state.clone()

        balance_tableau(state.tableau)
        dispatch_hand(state.tableau, state.hand, state.foundations)
        promote_to_foundations(state.tableau, state.foundations)
        self.ticks_in_game += 1

        if self.check_invariants:
            check_invariants(state)

        self.render()

        if state.tableau == before.tableau and state.hand == before.hand:
            return self.finish_game()
        return None

    def finish_game(self) -> Outcome:
        """Classify the current board, record it and deal the next game."""
        outcome = classify(self.state)
        self.stats.record(outcome)
        self.history.append(
            GameRecord(game=self.stats.games, ticks=self.ticks_in_game, outcome=outcome)
        )
        logger.debug(
            "Game %d: %s after %d ticks (wins=%d losses=%d)",
            self.stats.games,
            outcome.value,
            self.ticks_in_game,
            self.stats.wins,
            self.stats.losses,
        )
        self.new_game()
        return outcome

    def play_game(self, max_ticks: int = MAX_TICKS_PER_GAME) -> Outcome:
        """Tick until the current game is classified."""
        if self.state is None:
            self.new_game()
        while True:
            outcome = self.tick()
            if outcome is not None:
                return outcome
            if self.ticks_in_game >= max_ticks:
                logger.warning("Game still moving after %d ticks, classifying it now", max_ticks)
                return self.finish_game()

    def get_stats(self) -> Dict[str, float]:
        """Wins, losses and win ratio so far."""
        return stats_summary(self.stats)


def simulate_games(
    n_games: int = 1000,
    seed: Optional[int] = None,
    max_ticks: int = MAX_TICKS_PER_GAME,
) -> Tuple[Stats, List[GameRecord]]:
    """
    Headless batch: play `n_games` full games with no renderer.
    Returns the stats and one record per game.
    """
    if n_games < 0:
        raise ValueError(f"n_games must be non-negative, got {n_games}")

    driver = Driver(rng=random.Random(seed), check_invariants=False)
    for _ in range(n_games):
        driver.play_game(max_ticks=max_ticks)
    logger.info(
        "Simulated %d games: %d wins, %d losses (%.2f%%)",
        n_games,
        driver.stats.wins,
        driver.stats.losses,
        driver.stats.win_ratio * 100,
    )
    return driver.stats, driver.history
