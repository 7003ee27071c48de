"""Settings for the significance calculator.

Everything here is a plain module constant; only the log level is read from the
environment so a deployment can turn on debug output without code changes.
"""

import os

# Form defaults shown on first load
DEFAULT_FORM = {
    "visitors_a": 1000,
    "conversions_a": 35,
    "visitors_b": 1000,
    "conversions_b": 58,
    "confidence_level": 0.95,
}

# Two-tailed critical z for the supported confidence levels
CRITICAL_Z = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
CONFIDENCE_LEVELS = tuple(sorted(CRITICAL_Z))

# Distribution chart sampling
DENSITY_STEPS = 100
DENSITY_SIGMA_SPAN = 4.0
DENSITY_DISPLAY_HEIGHT = 60.0
DENSITY_MIN_HALF_WIDTH = 0.005  # used when both curves collapse onto one rate

# Chart colours
COLOR_A = "#2563eb"
COLOR_B = "#10b981"
CHART_TEMPLATES = {"light": "plotly_white", "dark": "plotly_dark"}
PAGE_COLORS = {
    "light": {"background": "#ffffff", "text": "#111827", "panel": "#f3f4f6"},
    "dark": {"background": "#111827", "text": "#f9fafb", "panel": "#1f2937"},
}

# UI
TABS = ("results", "visualization", "details")

# Static hosting copy (abcalc-deploy)
DEPLOY_SOURCE = "build"
DEPLOY_TARGET = "docs"

LOG_LEVEL = os.getenv("ABCALC_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
