from __future__ import annotations


class CalculatorError(Exception):
    """Base class for every error raised by abcalc."""


class ValidationError(CalculatorError, ValueError):
    """A form field could not be turned into a valid trial input."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class UnsupportedConfidenceLevelError(ValidationError):
    def __init__(self, value: object, supported) -> None:
        options = ", ".join(f"{level:.2f}" for level in supported)
        super().__init__("confidence_level", f"{value!r} is not one of {options}")
        self.value = value


class DeployError(CalculatorError):
    pass
