"""
UI components and visualization helpers.
"""

from typing import Callable, List

import pandas as pd
import plotly.express as px
import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from config import HIDDEN_LABEL, LOSS_COLOR, NUM_COLUMNS, RATIO_LINE_COLOR, WIN_COLOR
from models import Card, Foundations, Stats, Suit, Tableau
from game_logic import is_black
from analytics import win_percent


def print_rules() -> None:
    """Display the autoplay heuristics."""
    st.markdown("### Autoplay rules")
    st.write("Each tick runs three heuristics in a fixed order:")
    st.write(
        "1. **Balance the tableau**: right to left, move each column's face-up run onto "
        "the first column whose top card is one rank higher and the opposite color. "
        "A King run with hidden cards under it may move to an empty column."
    )
    st.write(
        "2. **Dispatch the hand**: last card first, place each reserve card on the "
        "tableau (Kings on empty columns) or else on its foundation."
    )
    st.write(
        "3. **Promote**: right to left, move each column's top card to its foundation "
        "when it is the next rank up."
    )
    st.info(
        "When a tick changes nothing the game is over. It is a win only if every card "
        "reached the foundations; then a new game is dealt."
    )


def card_markdown(card: Card, hidden: bool = False) -> str:
    """Markdown label for a card, red suits in red."""
    if hidden:
        return f"`{HIDDEN_LABEL}`"
    label = str(card)
    return label if is_black(card) else f":red[{label}]"


def render_state(tableau: Tableau, foundations: Foundations, hand: List[Card]) -> None:
    """Draw the tableau, the foundation piles and the reserve hand."""
    st.markdown("#### Tableau")
    cols = st.columns(NUM_COLUMNS)
    for col, column in zip(cols, tableau):
        with col:
            if not column:
                st.write("—")
            for card in column:
                st.markdown(card_markdown(card, hidden=not card.face_up))

    st.markdown("#### Foundations")
    pile_cols = st.columns(len(Suit))
    for col, suit in zip(pile_cols, Suit):
        pile = foundations[suit]
        with col:
            top = card_markdown(pile[-1]) if pile else "—"
            st.markdown(f"**{suit.symbol}** {top}")
            st.caption(f"{len(pile)} / 13")

    st.markdown(f"#### Hand ({len(hand)})")
    if hand:
        st.markdown(" ".join(card_markdown(card) for card in hand))
    else:
        st.write("*Empty*")


def slot_renderer(slot: DeltaGenerator) -> Callable[[Tableau, Foundations, List[Card]], None]:
    """
    Renderer that draws into a single `st.empty()` slot. Each call replaces
    the previous board, so a tick that ends a game and deals the next one
    leaves only the new deal on the page.
    """

    def render(tableau: Tableau, foundations: Foundations, hand: List[Card]) -> None:
        with slot.container():
            render_state(tableau, foundations, hand)

    return render


def render_stats(stats: Stats) -> None:
    """Won / lost / win % metrics."""
    col_won, col_lost, col_perc = st.columns(3)
    col_won.metric("Won", stats.wins)
    col_lost.metric("Lost", stats.losses)
    col_perc.metric("Win %", f"{win_percent(stats):.2f}%")


def render_history_chart(df: pd.DataFrame) -> None:
    """Plot the running win ratio, games colored by outcome."""
    if df.empty:
        st.info("No finished games yet.")
        return

    fig = px.scatter(
        df,
        x="game",
        y="win_ratio",
        color="outcome",
        color_discrete_map={"win": WIN_COLOR, "loss": LOSS_COLOR},
        hover_data=["ticks"],
    )
    fig.add_scatter(
        x=df["game"],
        y=df["win_ratio"],
        mode="lines",
        line=dict(color=RATIO_LINE_COLOR, width=1),
        showlegend=False,
    )
    fig.update_traces(marker=dict(size=6))
    fig.update_layout(
        yaxis=dict(title="Running win ratio", rangemode="tozero"),
        xaxis=dict(title="Game"),
        height=300,
        margin=dict(l=10, r=10, t=30, b=10),
        legend_title_text="Outcome",
    )
    st.plotly_chart(fig, use_container_width=True)


def render_outcome_table(summary: pd.DataFrame) -> None:
    """Table of games and tick counts per outcome."""
    st.markdown("#### Ticks per game by outcome")
    st.dataframe(summary, use_container_width=True, hide_index=True)
