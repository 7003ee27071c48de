from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import pandas as pd

from . import config
from .statistics import TrialResult, normal_pdf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DensityPoint:
    x: float  # conversion rate, percent
    density_a: float
    density_b: float


@dataclass(frozen=True)
class DensitySeries:
    """Sampled normal curves for A and B, ready to plot.

    Iterating yields the points in increasing x; the series can be iterated any
    number of times. `step` is in rate units (not percent) so that
    sum(density / scale) * step integrates a curve.
    """

    points: Tuple[DensityPoint, ...]
    step: float
    scale: float
    lower: float
    upper: float

    def __iter__(self) -> Iterator[DensityPoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"x": p.x, "A": p.density_a, "B": p.density_b} for p in self.points],
            columns=["x", "A", "B"],
        )


def _bounds(mean_a: float, std_a: float, mean_b: float, std_b: float, span: float) -> Tuple[float, float]:
    lower = min(mean_a - span * std_a, mean_b - span * std_b)
    upper = max(mean_a + span * std_a, mean_b + span * std_b)
    if upper - lower <= 0:
        lower -= config.DENSITY_MIN_HALF_WIDTH
        upper += config.DENSITY_MIN_HALF_WIDTH
    return lower, upper


def _spike_index(mean: float, lower: float, step: float, steps: int) -> int:
    return min(max(int(round((mean - lower) / step)), 0), steps)


def sample_density(
    mean_a: float,
    std_a: float,
    mean_b: float,
    std_b: float,
    steps: int = config.DENSITY_STEPS,
    span: float = config.DENSITY_SIGMA_SPAN,
    display_height: float = config.DENSITY_DISPLAY_HEIGHT,
) -> DensitySeries:
    """Evaluate both normal densities on a shared uniform grid.

    The grid covers `span` standard deviations either side of both means in
    `steps` equal intervals (steps + 1 points). Both curves share one scale
    factor chosen so the taller peak sits at `display_height`. A variant with
    zero standard deviation is drawn as a spike of `display_height` at the grid
    point nearest its mean.
    """
    if steps <= 0:
        raise ValueError("steps must be > 0")
    if std_a < 0 or std_b < 0:
        raise ValueError("standard deviations must be >= 0")

    lower, upper = _bounds(mean_a, std_a, mean_b, std_b, span)
    step = (upper - lower) / steps

    peaks = [normal_pdf(m, m, s) for m, s in ((mean_a, std_a), (mean_b, std_b)) if s > 0]
    scale = display_height / max(peaks) if peaks else 1.0

    spike_a: Optional[int] = None if std_a > 0 else _spike_index(mean_a, lower, step, steps)
    spike_b: Optional[int] = None if std_b > 0 else _spike_index(mean_b, lower, step, steps)
    if spike_a is not None or spike_b is not None:
        logger.debug("Zero-variance variant(s) drawn as spike: a=%s b=%s", spike_a, spike_b)

    def density(i: int, x: float, mean: float, std: float, spike: Optional[int]) -> float:
        if spike is not None:
            return display_height if i == spike else 0.0
        return normal_pdf(x, mean, std) * scale

    points = []
    for i in range(steps + 1):
        x = lower + i * step
        points.append(
            DensityPoint(
                x=x * 100,
                density_a=density(i, x, mean_a, std_a, spike_a),
                density_b=density(i, x, mean_b, std_b, spike_b),
            )
        )

    return DensitySeries(points=tuple(points), step=step, scale=scale, lower=lower, upper=upper)


def density_for_result(result: TrialResult, **kwargs) -> DensitySeries:
    return sample_density(result.rate_a, result.se_a, result.rate_b, result.se_b, **kwargs)
