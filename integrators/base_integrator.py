"""
Base integrator class defining the common interface for all time-stepping schemes.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Tuple

import numpy as np

from physics.errors import ValidationError

# derivative(thetas, omegas) -> alphas
Derivative = Callable[[np.ndarray, np.ndarray], np.ndarray]


class IntegrationMethod(Enum):
    """Available integration schemes with their display names and aliases."""

    FORWARD_EULER = ("Forward Euler", "forward")
    SEMI_IMPLICIT_EULER = ("Semi-implicit Euler", "semi")
    RUNGE_KUTTA = ("Runge-Kutta", "runge-kutta")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def names(self) -> Tuple[str, ...]:
        return self.value

    @classmethod
    def from_name(cls, name) -> "IntegrationMethod":
        """
        Parse an integration method.

        Accepts an IntegrationMethod, an enum member name ("RUNGE_KUTTA"),
        a display name ("Runge-Kutta") or a short alias ("rk4", "semi").
        Matching is case-insensitive.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise ValidationError(f"Integration method must be a string, got {name!r}")

        key = name.strip().lower()
        for method in cls:
            candidates = {method.name.lower()} | {n.lower() for n in method.names}
            if key in candidates:
                return method
        if key in ("rk4", "runge_kutta_4", "rungekutta4"):
            return cls.RUNGE_KUTTA
        raise ValidationError(f"Unknown integration method: {name!r}")


def snapshot(values) -> np.ndarray:
    """Read-only float copy of a state vector."""
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


class BaseIntegrator(ABC):
    """
    Abstract base class for all integrators.

    An integrator never touches the committed pendulum state. It receives
    snapshots of (thetas, omegas), calls the derivative as many times as the
    scheme needs and returns fresh arrays for the caller to commit.
    """

    method: IntegrationMethod = None

    def __init__(self, name: str = None):
        """
        Initialize integrator.

        Args:
            name: Integrator name for logging (defaults to the method's display name)
        """
        self.name = name or self.method.display_name

        # Usage tracking
        self.step_count = 0
        self.evaluation_count = 0

    def step(self, thetas, omegas, dt: float,
             derivative: Derivative) -> Tuple[np.ndarray, np.ndarray]:
        """
        Advance (thetas, omegas) by dt.

        Args:
            thetas: Current angles (rad)
            omegas: Current angular velocities (rad/s)
            dt: Time increment (s)
            derivative: Function returning angular accelerations for a state

        Returns:
            (new_thetas, new_omegas)
        """
        def counted(t, w):
            self.evaluation_count += 1
            return np.asarray(derivative(snapshot(t), snapshot(w)), dtype=float)

        new_thetas, new_omegas = self._advance(snapshot(thetas), snapshot(omegas),
                                               float(dt), counted)
        self.step_count += 1
        return new_thetas, new_omegas

    @abstractmethod
    def _advance(self, thetas: np.ndarray, omegas: np.ndarray, dt: float,
                 derivative: Derivative) -> Tuple[np.ndarray, np.ndarray]:
        """Scheme-specific update rule."""
        pass

    @property
    def evaluations_per_step(self) -> int:
        """Number of derivative evaluations one step costs."""
        return 1

    def reset(self):
        """Clear usage counters."""
        self.step_count = 0
        self.evaluation_count = 0

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get usage statistics.

        Returns:
            Dictionary with step and derivative evaluation counts
        """
        return {
            "integrator_name": self.name,
            "method": self.method.name,
            "total_steps": self.step_count,
            "derivative_evaluations": self.evaluation_count,
            "symplectic": self.is_symplectic(),
        }

    def is_symplectic(self) -> bool:
        return False

    def get_type(self) -> str:
        """Return integrator type identifier."""
        return self.method.name

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name})"
