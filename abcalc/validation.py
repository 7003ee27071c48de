"""
Form input validation.

The calculator form hands us whatever the widgets produced: ints, floats such
as 1000.0, or strings typed into a text box. `parse_trial_input` turns that
into a `TrialInput` or raises a `ValidationError` naming the first bad field.

Nothing is silently coerced to 0: an empty or non-numeric field is an error.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .errors import ValidationError
from .statistics import TrialInput, parse_count, supported_confidence_level

logger = logging.getLogger(__name__)

COUNT_FIELDS = ("visitors_a", "conversions_a", "visitors_b", "conversions_b")


def parse_trial_input(raw: Mapping[str, Any]) -> TrialInput:
    counts = {name: parse_count(name, raw.get(name)) for name in COUNT_FIELDS}

    if "confidence_level" not in raw:
        raise ValidationError("confidence_level", "is required")
    level = supported_confidence_level(raw["confidence_level"])

    trial = TrialInput(confidence_level=level, **counts)
    logger.debug("Validated form input: %s", trial)
    return trial
