"""Exceptions raised by the survey and visualization phases."""

from __future__ import annotations

from typing import Any, Optional


class PlotSurveyError(Exception):
    """Base class of all fatal plot survey errors."""


class MissingArgumentError(PlotSurveyError, ValueError):
    """Raised when a required constructor or call argument is ``None``."""

    def __init__(self, message: str = "arguments must not be nil"):
        super().__init__(message)


class InvalidDomainError(PlotSurveyError, ValueError):
    """Raised for a degenerate linear map domain (``in_min >= in_max``)."""

    def __init__(self, in_min: float, in_max: float):
        super().__init__(f"invalid input domain {in_min}:{in_max}")
        self.in_min = in_min
        self.in_max = in_max


class UnparsedMetaError(PlotSurveyError, ValueError):
    """Raised when numeric point meta turns out to be unparsed input."""

    def __init__(self, point: Any):
        super().__init__(f"got unparsed input {point}")
        self.point = point


class RejectedExpressionError(PlotSurveyError, ValueError):
    def __init__(self, expression: Any, reason: Optional[str] = None):
        message = f"point meta={expression}: expression has been rejected."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.expression = expression


class PhaseError(PlotSurveyError, RuntimeError):
    """Raised when a plot handler operation is called in the wrong phase."""

    def __init__(self, operation: str, expected: Any, actual: Any):
        super().__init__(f"{operation} requires phase {expected}, but the plot handler is in {actual}")
        self.operation = operation
        self.expected = expected
        self.actual = actual


__all__ = [
    "InvalidDomainError",
    "MissingArgumentError",
    "PhaseError",
    "PlotSurveyError",
    "RejectedExpressionError",
    "UnparsedMetaError",
]
