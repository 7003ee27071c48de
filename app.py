from __future__ import annotations

import streamlit as st

from abcalc import CalculatorState, recompute
from abcalc import config
from abcalc.charts import confidence_interval_figure, distribution_figure, page_style
from abcalc.log import configure_logging
from abcalc.report import (
    calculations_frame,
    details_frame,
    fmt_float,
    fmt_level,
    fmt_pct,
    interpretation_text,
    summary_message,
)

configure_logging()

st.set_page_config(page_title="A/B Test Calculator", layout="wide")

TAB_LABELS = {"results": "Results", "visualization": "Visualization", "details": "Details"}

if "calculator" not in st.session_state:
    st.session_state["calculator"] = CalculatorState()


def read_form(state: CalculatorState) -> CalculatorState:
    form = state.form
    with st.sidebar:
        st.header("Settings")

        st.subheader("Variant A (control)")
        visitors_a = st.number_input("Visitors", min_value=1, value=int(form["visitors_a"]), step=1, key="visitors_a")
        conversions_a = st.number_input("Conversions", min_value=0, value=int(form["conversions_a"]), step=1, key="conversions_a")

        st.subheader("Variant B")
        visitors_b = st.number_input("Visitors", min_value=1, value=int(form["visitors_b"]), step=1, key="visitors_b")
        conversions_b = st.number_input("Conversions", min_value=0, value=int(form["conversions_b"]), step=1, key="conversions_b")

        st.subheader("Advanced")
        levels = list(config.CONFIDENCE_LEVELS)
        confidence_level = st.selectbox(
            "Confidence level",
            levels,
            index=levels.index(form["confidence_level"]) if form["confidence_level"] in levels else 1,
            format_func=fmt_level,
        )

    return state.with_form(
        visitors_a=visitors_a,
        conversions_a=conversions_a,
        visitors_b=visitors_b,
        conversions_b=conversions_b,
        confidence_level=confidence_level,
    )


def render_summary(state: CalculatorState) -> None:
    summary = summary_message(state.trial, state.result)
    box = st.success if summary.is_significant else st.warning
    box(f"**{summary.headline}** {summary.message}")
    for note in state.result.warnings:
        st.info(note)


def render_results(state: CalculatorState) -> None:
    res = state.result

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Variant A", fmt_pct(res.rate_a))
    c2.metric("Variant B", fmt_pct(res.rate_b))
    c3.metric("Relative uplift", fmt_pct(res.relative_uplift))
    c4.metric("Absolute uplift", fmt_pct(res.absolute_uplift))

    c5, c6, c7, c8 = st.columns(4)
    c5.metric("p-value", fmt_float(res.p_value, 4))
    c6.metric("z-score", fmt_float(res.z_score, 2))
    c7.metric("Statistical power", fmt_pct(res.power))
    c8.metric("Result", "Significant" if res.is_significant else "Not significant")


def render_visualization(state: CalculatorState) -> None:
    st.markdown("#### Conversion rate distributions")
    st.plotly_chart(distribution_figure(state.density, state.result, state.theme), use_container_width=True)

    st.markdown(f"#### Confidence intervals ({fmt_level(state.trial.confidence_level)})")
    st.plotly_chart(confidence_interval_figure(state.result, state.theme), use_container_width=True)


def render_details(state: CalculatorState) -> None:
    st.markdown("#### Statistical details")
    st.dataframe(details_frame(state.trial, state.result), use_container_width=True, hide_index=True)

    st.markdown("#### Additional calculations")
    st.dataframe(calculations_frame(state.result), use_container_width=True, hide_index=True)

    st.markdown("#### How to read these results")
    st.info(interpretation_text(state.trial.confidence_level))


RENDERERS = {
    "results": render_results,
    "visualization": render_visualization,
    "details": render_details,
}


state = st.session_state["calculator"]

title_col, theme_col = st.columns([6, 1])
title_col.title("A/B Test Calculator")
if theme_col.button("☀️" if state.theme == "dark" else "🌙", help="Toggle light/dark theme"):
    state = state.toggle_theme()
st.markdown(page_style(state.theme), unsafe_allow_html=True)

state = recompute(read_form(state))

if state.error is not None:
    st.error(f"Check the form: {state.error}")
else:
    tab = st.radio(
        "View",
        list(config.TABS),
        index=config.TABS.index(state.active_tab),
        format_func=TAB_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    state = state.with_tab(tab)
    render_summary(state)
    RENDERERS[state.active_tab](state)

st.session_state["calculator"] = state
