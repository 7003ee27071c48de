"""
Calculator state.

The whole page is described by one immutable `CalculatorState`: the raw form
values, which tab and theme are selected, and the outputs of the last
successful computation. Updates return a new state; `recompute` is the only
place that runs validation and the statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from . import config
from .density import DensitySeries, density_for_result
from .errors import ValidationError
from .statistics import TrialInput, TrialResult, compute_trial_result
from .validation import parse_trial_input

logger = logging.getLogger(__name__)


def _default_form() -> Mapping[str, Any]:
    return MappingProxyType(dict(config.DEFAULT_FORM))


@dataclass(frozen=True)
class CalculatorState:
    form: Mapping[str, Any] = field(default_factory=_default_form)
    active_tab: str = "results"
    theme: str = "light"
    trial: Optional[TrialInput] = None
    result: Optional[TrialResult] = None
    density: Optional[DensitySeries] = None
    error: Optional[ValidationError] = None

    @property
    def has_result(self) -> bool:
        return self.result is not None

    def with_form(self, **values: Any) -> "CalculatorState":
        unknown = set(values) - set(config.DEFAULT_FORM)
        if unknown:
            raise KeyError(f"Unknown form fields: {sorted(unknown)}")
        form = dict(self.form)
        form.update(values)
        return replace(self, form=MappingProxyType(form))

    def with_tab(self, tab: str) -> "CalculatorState":
        if tab not in config.TABS:
            raise ValueError(f"tab must be one of {config.TABS}")
        return replace(self, active_tab=tab)

    def toggle_theme(self) -> "CalculatorState":
        return replace(self, theme="dark" if self.theme == "light" else "light")


def recompute(state: CalculatorState) -> CalculatorState:
    """Validate the form and rebuild every derived value.

    On invalid input the previous outputs are dropped and `error` explains
    which field to fix.
    """
    try:
        trial = parse_trial_input(state.form)
    except ValidationError as exc:
        logger.info("Form rejected: %s", exc)
        return replace(state, trial=None, result=None, density=None, error=exc)

    result = compute_trial_result(trial)
    return replace(
        state,
        trial=trial,
        result=result,
        density=density_for_result(result),
        error=None,
    )
