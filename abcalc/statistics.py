from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from . import config
from .errors import UnsupportedConfidenceLevelError, ValidationError

logger = logging.getLogger(__name__)


def parse_count(field: str, value: Any) -> int:
    """Coerce a single count field to a non-negative int."""
    if value is None:
        raise ValidationError(field, "is required")
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number, not a boolean")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(field, "is required")
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(field, f"{text!r} is not a number") from None

    if isinstance(value, numbers.Integral):
        number = int(value)
    elif isinstance(value, numbers.Real):
        value = float(value)
        if not math.isfinite(value):
            raise ValidationError(field, "must be a finite number")
        if not value.is_integer():
            raise ValidationError(field, f"must be a whole number, got {value}")
        number = int(value)
    else:
        raise ValidationError(field, f"unsupported type {type(value).__name__}")

    if number < 0:
        raise ValidationError(field, "must not be negative")
    try:
        float(number)
    except OverflowError:
        raise ValidationError(field, "is too large") from None
    return number


@dataclass(frozen=True)
class TrialInput:
    visitors_a: int
    conversions_a: int
    visitors_b: int
    conversions_b: int
    confidence_level: float = 0.95

    def __post_init__(self) -> None:
        for variant in ("a", "b"):
            visitors = parse_count(f"visitors_{variant}", getattr(self, f"visitors_{variant}"))
            conversions = parse_count(f"conversions_{variant}", getattr(self, f"conversions_{variant}"))
            object.__setattr__(self, f"visitors_{variant}", visitors)
            object.__setattr__(self, f"conversions_{variant}", conversions)
            if visitors <= 0:
                raise ValidationError(f"visitors_{variant}", "must be greater than 0")
            if conversions < 0:
                raise ValidationError(f"conversions_{variant}", "must not be negative")
            if conversions > visitors:
                raise ValidationError(
                    f"conversions_{variant}",
                    f"cannot exceed visitors ({conversions} > {visitors})",
                )
        # store the canonical table key so lookups never depend on float noise
        object.__setattr__(self, "confidence_level", supported_confidence_level(self.confidence_level))

    def swapped(self) -> "TrialInput":
        return TrialInput(
            visitors_a=self.visitors_b,
            conversions_a=self.conversions_b,
            visitors_b=self.visitors_a,
            conversions_b=self.conversions_a,
            confidence_level=self.confidence_level,
        )


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float
    upper: float

    def as_percent(self) -> Tuple[float, float]:
        return self.lower * 100, self.upper * 100

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class TrialResult:
    confidence_level: float
    rate_a: float
    rate_b: float
    se_a: float
    se_b: float
    se_diff: float
    absolute_uplift: float
    relative_uplift: Optional[float]
    z_score: Optional[float]
    p_value: Optional[float]
    critical_z: float
    power: Optional[float]
    is_significant: bool
    ci_a: ConfidenceInterval
    ci_b: ConfidenceInterval
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_degenerate(self) -> bool:
        return bool(self.warnings)


def supported_confidence_level(value: float) -> float:
    """Map `value` onto one of the supported levels or raise."""
    try:
        level = float(value)
    except (TypeError, ValueError):
        raise UnsupportedConfidenceLevelError(value, config.CONFIDENCE_LEVELS) from None
    for known in config.CONFIDENCE_LEVELS:
        if math.isclose(level, known, abs_tol=1e-9):
            return known
    raise UnsupportedConfidenceLevelError(value, config.CONFIDENCE_LEVELS)


def critical_z(confidence_level: float) -> float:
    return config.CRITICAL_Z[supported_confidence_level(confidence_level)]


def normal_cdf(x: float) -> float:
    """Standard normal CDF.

    Zelen & Severo polynomial approximation (Abramowitz & Stegun 26.2.17),
    absolute error below 7.5e-8. Results agree with the erf-based CDF to about
    six decimal places, which is plenty for reporting p-values and power.
    """
    t = 1 / (1 + 0.2316419 * abs(x))
    d = 0.3989423 * math.exp(-x * x / 2)
    prob = d * t * (0.3193815 + t * (-0.3565638 + t * (1.781478 + t * (-1.821256 + t * 1.330274))))
    if x > 0:
        prob = 1 - prob
    return prob


def normal_pdf(x: float, mean: float, std_dev: float) -> float:
    if std_dev <= 0:
        raise ValueError("std_dev must be > 0")
    return math.exp(-((x - mean) ** 2) / (2 * std_dev ** 2)) / (std_dev * math.sqrt(2 * math.pi))


def standard_error(rate: float, visitors: int) -> float:
    return math.sqrt(rate * (1 - rate) / visitors)


def two_tailed_p_value(z_score: float) -> float:
    return 2 * (1 - normal_cdf(abs(z_score)))


def statistical_power(z_score: float, z_crit: float) -> float:
    """Probability of detecting an effect the size of the observed one."""
    z = abs(z_score)
    return 1 - normal_cdf(z_crit - z) + normal_cdf(-z_crit - z)


def compute_trial_result(trial: TrialInput) -> TrialResult:
    """Unpooled two-proportion z-test + Wald CI per variant.

    Quantities that are undefined for the input (relative uplift when A never
    converts, z/p/power when both standard errors are zero) come back as None
    and are explained in `warnings`; no NaN or inf ever leaves this function.
    """
    rate_a = trial.conversions_a / trial.visitors_a
    rate_b = trial.conversions_b / trial.visitors_b

    se_a = standard_error(rate_a, trial.visitors_a)
    se_b = standard_error(rate_b, trial.visitors_b)
    se_diff = math.sqrt(se_a ** 2 + se_b ** 2)

    diff = rate_b - rate_a
    notes = []

    if rate_a == 0:
        relative_uplift = None
        notes.append("Relative uplift is undefined because variant A has no conversions.")
    else:
        relative_uplift = diff / rate_a

    z_crit = critical_z(trial.confidence_level)

    if se_diff == 0:
        z_score = p_value = power = None
        notes.append(
            "z-score, p-value and power are undefined because both conversion rates "
            "are exactly 0% or 100%."
        )
    else:
        z_score = diff / se_diff
        p_value = two_tailed_p_value(z_score)
        power = statistical_power(z_score, z_crit)

    alpha = 1 - trial.confidence_level
    is_significant = p_value is not None and p_value < alpha

    result = TrialResult(
        confidence_level=trial.confidence_level,
        rate_a=rate_a,
        rate_b=rate_b,
        se_a=se_a,
        se_b=se_b,
        se_diff=se_diff,
        absolute_uplift=diff,
        relative_uplift=relative_uplift,
        z_score=z_score,
        p_value=p_value,
        critical_z=z_crit,
        power=power,
        is_significant=is_significant,
        ci_a=ConfidenceInterval(lower=rate_a - z_crit * se_a, upper=rate_a + z_crit * se_a),
        ci_b=ConfidenceInterval(lower=rate_b - z_crit * se_b, upper=rate_b + z_crit * se_b),
        warnings=tuple(notes),
    )

    for note in notes:
        logger.warning("Degenerate trial %s: %s", trial, note)
    logger.debug(
        "Computed trial: rate_a=%.6f rate_b=%.6f z=%s p=%s significant=%s",
        rate_a, rate_b, z_score, p_value, is_significant,
    )
    return result
