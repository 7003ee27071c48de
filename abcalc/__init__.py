"""Core logic of the A/B test significance calculator."""

from .errors import CalculatorError, DeployError, UnsupportedConfidenceLevelError, ValidationError
from .statistics import (
    ConfidenceInterval,
    TrialInput,
    TrialResult,
    compute_trial_result,
    critical_z,
    normal_cdf,
    normal_pdf,
    statistical_power,
    two_tailed_p_value,
)
from .density import DensityPoint, DensitySeries, density_for_result, sample_density
from .validation import parse_trial_input
from .state import CalculatorState, recompute
