"""
Physics core for pendulum chains: body models, geometry, dynamics and energy.
"""
from physics.bodies import DENSITY, PointMass, UniformRod, get_body_model
from physics.dynamics import GRAVITY, compute_angular_accelerations
from physics.errors import (
    PendulumError,
    SingularSystemError,
    UnsupportedDimensionError,
    ValidationError,
)

__all__ = [
    "DENSITY",
    "GRAVITY",
    "PointMass",
    "UniformRod",
    "get_body_model",
    "compute_angular_accelerations",
    "PendulumError",
    "SingularSystemError",
    "UnsupportedDimensionError",
    "ValidationError",
]
