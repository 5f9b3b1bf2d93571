"""
Game analytics: stats projections and per-game history tables.
"""

from typing import Dict, List

import pandas as pd

from models import GameRecord, Outcome, Stats


def stats_summary(stats: Stats) -> Dict[str, float]:
    """Read-only view of the counters, ratio recomputed from them."""
    return {
        "wins": stats.wins,
        "losses": stats.losses,
        "win_ratio": stats.win_ratio,
    }


def win_percent(stats: Stats) -> float:
    """Win ratio as a percentage rounded to two decimals (e.g. 12.35)."""
    return round(stats.win_ratio * 10000) / 100


def history_frame(records: List[GameRecord]) -> pd.DataFrame:
    """
    One row per classified game with a running win ratio.
    Columns: game, ticks, outcome, won, wins, win_ratio.
    """
    columns = ["game", "ticks", "outcome", "won", "wins", "win_ratio"]
    if not records:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(
        {
            "game": [r.game for r in records],
            "ticks": [r.ticks for r in records],
            "outcome": [r.outcome.value for r in records],
            "won": [r.outcome is Outcome.WIN for r in records],
        }
    )
    df["wins"] = df["won"].cumsum()
    df["win_ratio"] = df["wins"] / pd.Series(range(1, len(df) + 1), index=df.index)
    return df[columns]


def outcome_summary(records: List[GameRecord]) -> pd.DataFrame:
    """Games, mean and max ticks grouped by outcome."""
    df = history_frame(records)
    if df.empty:
        return pd.DataFrame(columns=["outcome", "games", "mean_ticks", "max_ticks"])
    return (
        df.groupby("outcome")["ticks"]
        .agg(games="count", mean_ticks="mean", max_ticks="max")
        .reset_index()
    )
