"""
Exceptions raised by the pendulum physics core.

None of these are transient: every failure comes from bad input or an
unsupported configuration, so callers should treat them as fatal for the run.
"""
import numpy as np


class PendulumError(Exception):
    """Base class for all pendulum simulation errors."""


class ValidationError(PendulumError, ValueError):
    """Pendulum parameters are inconsistent (array lengths, non-positive values)."""


class UnsupportedDimensionError(PendulumError, NotImplementedError):
    """Equations of motion are only derived for one and two links."""

    def __init__(self, dimension):
        self.dimension = dimension
        super().__init__(
            f"Unsupported dimension {dimension}: only 1 or 2 links are implemented"
        )


class SingularSystemError(PendulumError, np.linalg.LinAlgError):
    """The 2x2 mass matrix of the double pendulum could not be inverted."""
