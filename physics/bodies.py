"""
Rigid body models for a single pendulum link.

Two models are supported:
- PointMass: all mass sits in a sphere at the tip of the link ("bulb")
- UniformRod: the link itself is a uniform rod of the given mass ("compound")

The model is chosen once per pendulum and applies to every link.
"""
from abc import ABC, abstractmethod

import numpy as np

DENSITY = 999.97  # kilograms / meter^3 (water)


class BodyModel(ABC):
    """
    Abstract base class for link body models.

    Supplies the formulas that differ between bulbs and rods: drawing radius,
    center of mass position along the link and inertia about the link's own
    center of mass.
    """

    name = "body"
    compound = False

    # Fraction of the link length at which the center of mass sits,
    # measured from the proximal joint.
    com_fraction = 1.0

    @abstractmethod
    def radius(self, mass: float, length: float, density: float = DENSITY) -> float:
        """
        Radius of the solid that represents the link.

        Args:
            mass: Link mass (kg)
            length: Link length (m)
            density: Material density (kg/m^3)

        Returns:
            Radius in meters
        """
        pass

    @abstractmethod
    def central_inertia(self, mass: float, length: float) -> float:
        """Moment of inertia about the link's own center of mass (kg*m^2)."""
        pass

    def rotational_energy(self, mass: float, length: float, omega: float) -> float:
        """Kinetic energy of spinning about the center of mass."""
        return 0.5 * self.central_inertia(mass, length) * omega**2

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class PointMass(BodyModel):
    """Mass concentrated in a sphere at the tip of the link."""

    name = "point-mass"
    compound = False
    com_fraction = 1.0

    def radius(self, mass, length, density=DENSITY):
        # Sphere of volume m / rho
        return ((3.0 * mass) / (4.0 * np.pi * density)) ** (1.0 / 3.0)

    def central_inertia(self, mass, length):
        return 0.0


class UniformRod(BodyModel):
    """Uniform rigid rod pivoting at its proximal end."""

    name = "uniform-rod"
    compound = True
    com_fraction = 0.5

    def radius(self, mass, length, density=DENSITY):
        # Cylinder: pi * r^2 * l * rho = m
        return np.sqrt(mass / (np.pi * length * density))

    def central_inertia(self, mass, length):
        return mass * length**2 / 12.0


def get_body_model(compound):
    """
    Select the body model for a pendulum.

    Args:
        compound: True for uniform rods, False for point masses

    Returns:
        BodyModel instance
    """
    return UniformRod() if compound else PointMass()
