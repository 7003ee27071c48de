from __future__ import annotations

import plotly.graph_objects as go

from . import config
from .density import DensitySeries
from .statistics import TrialResult


def _template(theme: str) -> str:
    return config.CHART_TEMPLATES.get(theme, config.CHART_TEMPLATES["light"])


def distribution_figure(series: DensitySeries, result: TrialResult, theme: str = "light") -> go.Figure:
    """Overlapping sampling distributions of the two conversion rates."""
    df = series.to_frame()

    fig = go.Figure()
    for variant, color in (("A", config.COLOR_A), ("B", config.COLOR_B)):
        fig.add_trace(
            go.Scatter(
                x=df["x"],
                y=df[variant],
                mode="lines",
                fill="tozeroy",
                line=dict(color=color, width=2),
                opacity=0.6,
                name=f"Variant {variant}",
                hovertemplate="CR: %{x:.2f}%<br>Density: %{y:.2f}<extra>Variant " + variant + "</extra>",
            )
        )

    for label, rate, color in (("A", result.rate_a, config.COLOR_A), ("B", result.rate_b, config.COLOR_B)):
        fig.add_vline(
            x=rate * 100,
            line=dict(color=color, dash="dash", width=1),
            annotation_text=label,
            annotation_position="top",
            annotation_font_color=color,
        )

    fig.update_layout(
        template=_template(theme),
        xaxis_title="Conversion rate (%)",
        yaxis_title="Density",
        height=360,
        margin=dict(t=30, r=30, l=0, b=0),
    )
    fig.update_xaxes(tickformat=".1f")
    return fig


def confidence_interval_figure(result: TrialResult, theme: str = "light") -> go.Figure:
    """One horizontal bar per variant spanning its confidence interval."""
    a_low, a_high = result.ci_a.as_percent()
    b_low, b_high = result.ci_b.as_percent()

    fig = go.Figure()
    rows = (
        ("Variant A", result.rate_a * 100, a_low, a_high, config.COLOR_A),
        ("Variant B", result.rate_b * 100, b_low, b_high, config.COLOR_B),
    )
    for name, rate, low, high, color in rows:
        fig.add_trace(
            go.Scatter(
                x=[low, high],
                y=[name, name],
                mode="lines+markers",
                line=dict(color=color, width=8),
                marker=dict(size=8),
                name=f"Interval {name[-1]}",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[rate],
                y=[name],
                mode="markers",
                marker=dict(size=14, color=color, symbol="diamond"),
                showlegend=False,
                hovertemplate="%{x:.2f}%<extra>" + name + "</extra>",
            )
        )

    fig.update_layout(
        template=_template(theme),
        xaxis_title="Conversion rate (%)",
        height=240,
        margin=dict(t=20, r=30, l=0, b=0),
    )
    fig.update_xaxes(range=[min(a_low, b_low) - 0.5, max(a_high, b_high) + 0.5])
    return fig


def page_style(theme: str = "light") -> str:
    """CSS block that recolours the Streamlit page to match the chart theme."""
    colors = config.PAGE_COLORS.get(theme, config.PAGE_COLORS["light"])
    return (
        "<style>\n"
        f".stApp {{ background-color: {colors['background']}; color: {colors['text']}; }}\n"
        f"[data-testid=\"stSidebar\"] {{ background-color: {colors['panel']}; }}\n"
        f".stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label {{ color: {colors['text']}; }}\n"
        "</style>"
    )
