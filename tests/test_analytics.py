import pytest

from models import GameRecord, Outcome, Stats
from analytics import history_frame, outcome_summary, stats_summary, win_percent


def _records(outcomes):
    return [
        GameRecord(game=i + 1, ticks=10 * (i + 1), outcome=o)
        for i, o in enumerate(outcomes)
    ]


def test_stats_summary_no_games():
    assert stats_summary(Stats()) == {"wins": 0, "losses": 0, "win_ratio": 0.0}


def test_stats_record():
    stats = Stats()
    stats.record(Outcome.WIN)
    stats.record(Outcome.LOSS)
    stats.record(Outcome.LOSS)
    assert (stats.wins, stats.losses, stats.games) == (1, 2, 3)
    assert stats.win_ratio == pytest.approx(1 / 3)


def test_win_percent_rounds_to_two_decimals():
    assert win_percent(Stats(wins=1, losses=2)) == 33.33
    assert win_percent(Stats(wins=2, losses=1)) == 66.67
    assert win_percent(Stats()) == 0.0


def test_history_frame_running_ratio():
    df = history_frame(_records([Outcome.LOSS, Outcome.WIN, Outcome.LOSS, Outcome.WIN]))
    assert list(df.columns) == ["game", "ticks", "outcome", "won", "wins", "win_ratio"]
    assert df["outcome"].tolist() == ["loss", "win", "loss", "win"]
    assert df["wins"].tolist() == [0, 1, 1, 2]
    assert df["win_ratio"].tolist() == pytest.approx([0.0, 0.5, 1 / 3, 0.5])


def test_history_frame_empty():
    df = history_frame([])
    assert df.empty
    assert "win_ratio" in df.columns


def test_outcome_summary():
    summary = outcome_summary(_records([Outcome.LOSS, Outcome.WIN, Outcome.LOSS]))
    rows = summary.set_index("outcome")
    assert rows.loc["loss", "games"] == 2
    assert rows.loc["loss", "mean_ticks"] == pytest.approx(20.0)
    assert rows.loc["loss", "max_ticks"] == 30
    assert rows.loc["win", "games"] == 1


def test_outcome_summary_empty():
    assert outcome_summary([]).empty
