from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .statistics import TrialInput, TrialResult

NOT_AVAILABLE = "n/a"


@dataclass(frozen=True)
class Summary:
    headline: str
    message: str
    is_significant: bool


def fmt_pct(value: Optional[float], digits: int = 2) -> str:
    """Format a fraction as a percentage; None renders as n/a."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value * 100:.{digits}f}%"


def fmt_float(value: Optional[float], digits: int = 4) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{digits}f}"


def fmt_ci(lower: float, upper: float, digits: int = 2) -> str:
    return f"{fmt_pct(lower, digits)} - {fmt_pct(upper, digits)}"


def fmt_level(confidence_level: float) -> str:
    return f"{confidence_level * 100:.0f}%"


def summary_message(trial: TrialInput, result: TrialResult) -> Summary:
    level = fmt_level(trial.confidence_level)
    direction = "higher" if result.rate_b > result.rate_a else "lower"

    if result.rate_b == result.rate_a:
        comparison = (
            f"Variant B's conversion rate ({fmt_pct(result.rate_b)}) was the same as "
            f"variant A's ({fmt_pct(result.rate_a)})."
        )
    elif result.relative_uplift is None:
        comparison = (
            f"Variant B converted at {fmt_pct(result.rate_b)} while variant A had no "
            "conversions, so the relative difference is undefined."
        )
    else:
        comparison = (
            f"Variant B's conversion rate ({fmt_pct(result.rate_b)}) was "
            f"{fmt_pct(abs(result.relative_uplift))} {direction} than variant A's "
            f"({fmt_pct(result.rate_a)})."
        )

    if result.is_significant:
        return Summary(
            headline="Significant result!",
            message=(
                f"{comparison} You can be {level} confident that this difference comes "
                "from the changes you made and not from chance."
            ),
            is_significant=True,
        )

    return Summary(
        headline="Result not significant",
        message=f"{comparison} This result is not statistically significant and could be due to chance.",
        is_significant=False,
    )


def results_frame(result: TrialResult) -> pd.DataFrame:
    rows = [
        ("Conversion rate A", fmt_pct(result.rate_a)),
        ("Conversion rate B", fmt_pct(result.rate_b)),
        ("Relative uplift", fmt_pct(result.relative_uplift)),
        ("Absolute uplift", fmt_pct(result.absolute_uplift)),
        ("p-value", fmt_float(result.p_value, 4)),
        ("z-score", fmt_float(result.z_score, 2)),
        ("Statistical power", fmt_pct(result.power)),
        ("Result", "Significant" if result.is_significant else "Not significant"),
    ]
    return pd.DataFrame(rows, columns=["metric", "value"])


def details_frame(trial: TrialInput, result: TrialResult) -> pd.DataFrame:
    level = fmt_level(trial.confidence_level)
    rows = [
        ("Visitors", str(trial.visitors_a), str(trial.visitors_b)),
        ("Conversions", str(trial.conversions_a), str(trial.conversions_b)),
        ("Conversion rate", fmt_pct(result.rate_a), fmt_pct(result.rate_b)),
        ("Standard error", fmt_float(result.se_a, 6), fmt_float(result.se_b, 6)),
        (
            f"Confidence interval ({level})",
            fmt_ci(result.ci_a.lower, result.ci_a.upper),
            fmt_ci(result.ci_b.lower, result.ci_b.upper),
        ),
    ]
    return pd.DataFrame(rows, columns=["metric", "variant_a", "variant_b"])


def calculations_frame(result: TrialResult) -> pd.DataFrame:
    rows = [
        ("Standard error of the difference", fmt_float(result.se_diff, 6)),
        ("z-score", fmt_float(result.z_score, 4)),
        ("p-value (two-tailed)", fmt_float(result.p_value, 6)),
        ("Critical z", fmt_float(result.critical_z, 3)),
        ("Statistical power", fmt_pct(result.power)),
        ("Relative uplift", fmt_pct(result.relative_uplift)),
        ("Absolute uplift", fmt_pct(result.absolute_uplift)),
    ]
    return pd.DataFrame(rows, columns=["calculation", "value"])


def interpretation_text(confidence_level: float) -> str:
    return (
        f"A **p-value** below {1 - confidence_level:.2f} means there is a statistically "
        f"significant difference between the variants at the {fmt_level(confidence_level)} "
        "confidence level. **Statistical power** above 80% means the test had enough "
        "capacity to detect a real difference of the observed size. If the "
        "**confidence intervals** of the two variants do not overlap, there is strong "
        "evidence of a real difference."
    )
