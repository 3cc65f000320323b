"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for the staffing planner."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PlannerError):
    """Resource not found."""

    pass


class AssignmentNotFoundError(NotFoundError):
    """No assignment exists for the (user, project) pair."""

    pass


class ValidationError(PlannerError):
    """Validation error."""

    pass


class InvalidRangeError(ValidationError):
    """A time range ends at or before its start."""

    pass


class TimeBlockValidationError(ValidationError):
    """A proposed batch of time blocks was rejected."""

    pass


class InvalidTimeRangeError(TimeBlockValidationError, InvalidRangeError):
    """Time block start is not before its end."""

    pass


class CommentRequiredError(TimeBlockValidationError):
    """Overtime block submitted without the mandatory comment."""

    pass


class DailyLimitExceededError(TimeBlockValidationError):
    """Hours on one date exceed the overtime ceiling."""

    pass


class OutOfProjectRangeError(TimeBlockValidationError):
    """Time block falls outside the project's date range."""

    pass


class OverlapError(TimeBlockValidationError):
    """Time block overlaps another active block of the same user."""

    pass


class SimulationError(ValidationError):
    """Cascade simulation cannot produce an allocation."""

    pass


class SimulationStartBeforeProjectError(SimulationError):
    """Simulation requested before the project starts."""

    pass


class SimulationHorizonExceededError(SimulationError):
    """Hours could not be placed within the simulation horizon."""

    pass


class ConfigurationMissingError(PlannerError):
    """Required configuration is missing."""

    pass
