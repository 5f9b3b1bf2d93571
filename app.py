"""
Main Streamlit application.
"""

import logging

import streamlit as st

from config import (
    BATCH_SIMULATIONS,
    HISTORY_WINDOW,
    INTERVAL_STEP_MS,
    LOG_LEVEL,
    MAX_INTERVAL_MS,
    MIN_INTERVAL_MS,
)
from simulation import Driver, simulate_games
from analytics import history_frame, outcome_summary

from ui import (
    print_rules,
    render_history_chart,
    render_outcome_table,
    render_stats,
    slot_renderer,
)


def _change_speed() -> None:
    driver: Driver = st.session_state["driver"]
    driver.set_speed(int(st.session_state["interval_ms"]))


def render_batch_panel() -> None:
    """Sidebar: play many games headlessly and summarize them."""
    st.header("Batch simulation")
    n_games = st.number_input("Games", min_value=1, max_value=100000, value=BATCH_SIMULATIONS, step=100)
    seed = st.number_input("Seed", min_value=0, value=0, step=1)

    if st.button("Run batch"):
        with st.spinner(f"Playing {int(n_games)} games..."):
            st.session_state["batch"] = simulate_games(int(n_games), seed=int(seed))

    if "batch" in st.session_state:
        stats, records = st.session_state["batch"]
        render_stats(stats)
        render_outcome_table(outcome_summary(records))


def run_app() -> None:
    """Run the main Streamlit application."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title="Solitaire Autoplay Simulator", layout="wide")
    st.title("Solitaire Autoplay Simulator")

    # Initialize session state
    if "driver" not in st.session_state:
        st.session_state["driver"] = Driver()

    driver: Driver = st.session_state["driver"]

    with st.expander("Autoplay rules", expanded=False):
        print_rules()

    # Controls
    col_stop, col_speed = st.columns([1, 3])

    with col_stop:
        st.button("▶ Resume" if driver.stopped else "⏸ Stop", on_click=driver.toggle_stop)

    with col_speed:
        st.slider(
            "Tick interval (ms)",
            min_value=MIN_INTERVAL_MS,
            max_value=MAX_INTERVAL_MS,
            value=driver.interval_ms,
            step=INTERVAL_STEP_MS,
            key="interval_ms",
            on_change=_change_speed,
        )

    # The fragment is the tick scheduler; stopping drops its timer.
    @st.fragment(run_every=driver.scheduled_interval())
    def board_panel() -> None:
        # one slot per fragment run; every render replaces the board in it
        driver.renderer = slot_renderer(st.empty())
        if driver.state is None:
            driver.new_game()
        elif driver.stopped:
            driver.render()
        else:
            driver.tick()

        st.markdown("---")
        render_stats(driver.stats)
        render_history_chart(history_frame(driver.history).tail(HISTORY_WINDOW))

    board_panel()

    with st.sidebar:
        render_batch_panel()


if __name__ == "__main__":
    run_app()
