"""
Exceptions raised by the psychrometric engine.

All of them derive from ValueError so callers that already treat bad input as
a ValueError (the API layer maps it to HTTP 422) keep working. Each error
records the physical quantity and the numeric value that caused it.
"""

from typing import Optional


class PsychroError(ValueError):
    """Base class for psychrometric calculation failures."""

    def __init__(self, quantity: str, value: float, message: str):
        self.quantity = quantity
        self.value = value
        super().__init__(message)


class InvalidRelativeHumidity(PsychroError):
    """Requested or implied relative humidity is outside [0, 1]."""

    def __init__(self, value: float, quantity: str = "relative humidity"):
        super().__init__(
            quantity,
            value,
            f"Invalid {quantity}: {value}. Value must be between 0 and 1",
        )


class InvalidInputRange(PsychroError):
    """Temperature outside the validity window of the saturation model."""

    def __init__(
        self,
        quantity: str,
        value: float,
        unit_system,
        bounds: tuple[float, float],
    ):
        self.unit_system = unit_system
        self.bounds = bounds
        super().__init__(
            quantity,
            value,
            f"{quantity.capitalize()} {value} is out of range "
            f"[{bounds[0]}, {bounds[1]}] for unit system {unit_system.value}",
        )


class InvalidOrdering(PsychroError):
    """Wet-bulb or dew point temperature above the dry-bulb temperature."""

    def __init__(self, quantity: str, value: float, Tdb: float):
        self.Tdb = Tdb
        super().__init__(
            quantity,
            value,
            f"{quantity.capitalize()} {value} exceeds the dry-bulb temperature {Tdb}",
        )


class ConvergenceFailure(PsychroError):
    """Newton-Raphson solve ran out of iterations or hit a non-finite value."""

    def __init__(self, quantity: str, value: float, reason: Optional[str] = None):
        message = f"Calculation of {quantity} did not converge (last value {value})"
        if reason:
            message += f": {reason}"
        super().__init__(quantity, value, message)


class InvalidParameter(PsychroError):
    """Malformed numeric input, e.g. a non-positive mass flow."""

    def __init__(self, quantity: str, value: float, reason: str):
        super().__init__(
            quantity,
            value,
            f"Invalid {quantity}: {value}. {reason}",
        )
