"""
Pendulum chain simulation.

State vector per link: θ (absolute angle from the downward vertical, rad) and
ω (angular velocity, rad/s).
- θ = 0: hanging down
- θ = π/2: horizontal, tip pointing to +x

The Pendulum owns its angular state and simulated time. Everything else
(lengths, masses, body model, integration scheme, gravity, density) is fixed
at construction.
"""
import numpy as np

from integrators import DEFAULT_METHOD, IntegrationMethod, create_integrator
from physics import geometry
from physics.bodies import DENSITY, get_body_model
from physics.dynamics import GRAVITY, compute_angular_accelerations
from physics.energy import energy_breakdown
from physics.errors import ValidationError


def _as_vector(name, values):
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as err:
        raise ValidationError(f"{name} must be a sequence of numbers") from err
    if arr.ndim == 0:
        raise ValidationError(f"{name} must be a sequence, got a scalar")
    if arr.ndim != 1:
        raise ValidationError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{name} must be finite")
    return arr


def _read_only(arr):
    arr = arr.copy()
    arr.flags.writeable = False
    return arr


class Pendulum:
    """
    Chain of one or two pivoted rigid links under gravity.

    Args:
        lengths: Link lengths (m), all positive
        masses: Link masses (kg), all positive
        thetas: Initial angles (rad)
        omegas: Initial angular velocities (rad/s)
        integration_method: IntegrationMethod or name; defaults to
            semi-implicit Euler
        compound: False for point-mass bulbs, True for uniform rods
        gravity: Gravitational acceleration (m/s^2)
        density: Material density used for the drawing radii (kg/m^3)

    Example:
        pendulum = Pendulum(lengths=[1.0], masses=[2.0],
                            thetas=[np.pi / 2], omegas=[0.0])
        pendulum.take_step(0.005)
    """

    def __init__(self, lengths, masses, thetas, omegas, integration_method=None,
                 compound=False, gravity=GRAVITY, density=DENSITY):
        lengths = _as_vector("lengths", lengths)
        masses = _as_vector("masses", masses)
        thetas = _as_vector("thetas", thetas)
        omegas = _as_vector("omegas", omegas)

        if not (len(lengths) == len(masses) == len(thetas) == len(omegas)):
            raise ValidationError(
                "All parameters must be arrays of the same length "
                f"(lengths={len(lengths)}, masses={len(masses)}, "
                f"thetas={len(thetas)}, omegas={len(omegas)})"
            )
        if len(lengths) == 0:
            raise ValidationError("A pendulum needs at least one link")
        if np.any(lengths <= 0.0):
            raise ValidationError(f"Lengths must be positive, got {lengths.tolist()}")
        if np.any(masses <= 0.0):
            raise ValidationError(f"Masses must be positive, got {masses.tolist()}")
        if not gravity >= 0.0:
            raise ValidationError(f"Gravity must be non-negative, got {gravity}")
        if not density > 0.0:
            raise ValidationError(f"Density must be positive, got {density}")

        if integration_method is None:
            integration_method = DEFAULT_METHOD
        self._integration_method = IntegrationMethod.from_name(integration_method)
        self._integrator = create_integrator(self._integration_method)

        self._lengths = _read_only(lengths)
        self._masses = _read_only(masses)
        self._compound = bool(compound)
        self._body = get_body_model(self._compound)
        self._gravity = float(gravity)
        self._density = float(density)

        # Mutable angular state, updated in place and never resized
        self._thetas = thetas
        self._omegas = omegas
        self._time = 0.0

        self._radii = _read_only(geometry.radii(self._lengths, self._masses,
                                                self._body, self._density))
        self._total_length = geometry.total_length(self._lengths, self._radii)

    # ------------------------------------------------------------------
    # Fixed configuration
    # ------------------------------------------------------------------

    @property
    def lengths(self):
        return self._lengths

    @property
    def masses(self):
        return self._masses

    @property
    def compound(self):
        return self._compound

    @property
    def body(self):
        return self._body

    @property
    def integration_method(self):
        return self._integration_method

    @property
    def integrator(self):
        return self._integrator

    @property
    def gravity(self):
        return self._gravity

    @property
    def density(self):
        return self._density

    @property
    def dimension(self):
        return len(self._lengths)

    @property
    def radii(self):
        """Radius of each bulb (point mass) or rod cross-section (compound)."""
        return self._radii

    @property
    def total_length(self):
        return self._total_length

    # ------------------------------------------------------------------
    # Angular state (only take_step writes it)
    # ------------------------------------------------------------------

    @property
    def thetas(self):
        return self._thetas

    @property
    def omegas(self):
        return self._omegas

    @property
    def time(self):
        """Simulated time (s), advanced only by take_step."""
        return self._time

    # ------------------------------------------------------------------
    # Dynamics and stepping
    # ------------------------------------------------------------------

    def compute_alphas(self, thetas=None, omegas=None, torque=None):
        """
        Angular accelerations at the given state (defaults to the current one).

        Raises:
            UnsupportedDimensionError: More than two links
            SingularSystemError: Degenerate double pendulum
        """
        thetas = self.thetas if thetas is None else thetas
        omegas = self.omegas if omegas is None else omegas
        return compute_angular_accelerations(
            self._lengths, self._masses, thetas, omegas, self._body,
            torque=torque, gravity=self._gravity,
        )

    def take_step(self, dt, torque=None):
        """
        Advance the simulation by dt seconds.

        All stages are computed on snapshots first; the angles, velocities
        and time are only committed once the whole step succeeded.

        Args:
            dt: Time increment (s)
            torque: Optional external generalized torque, held constant
                over the step

        Raises:
            ValidationError: dt is not a finite non-negative number, or the
                torque is malformed
        """
        try:
            dt = float(dt)
        except (TypeError, ValueError) as err:
            raise ValidationError(f"Time step must be a number, got {dt!r}") from err
        if not (np.isfinite(dt) and dt >= 0.0):
            raise ValidationError(f"Time step must be finite and non-negative, got {dt}")

        def derivative(thetas, omegas):
            return self.compute_alphas(thetas, omegas, torque=torque)

        new_thetas, new_omegas = self._integrator.step(self._thetas, self._omegas,
                                                       dt, derivative)

        self._thetas[:] = new_thetas
        self._omegas[:] = new_omegas
        self._time += dt

    def run(self, n_steps, dt, torque=None, callback=None):
        """
        Take n_steps fixed steps.

        Args:
            n_steps: Number of steps
            dt: Time increment per step (s)
            torque: Optional constant torque
            callback: Optional callable invoked with the pendulum after each step
        """
        for _ in range(int(n_steps)):
            self.take_step(dt, torque=torque)
            if callback is not None:
                callback(self)

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    def joint_positions(self):
        """Tip of each link, shape (n, 2), pendulum-frame meters."""
        return geometry.joint_positions(self._lengths, self.thetas)

    def centers_of_mass(self):
        return geometry.centers_of_mass(self._lengths, self.thetas, self._body)

    def velocities(self):
        """Center of mass velocity of each link, shape (n, 2)."""
        return geometry.velocities(self._lengths, self.thetas, self.omegas, self._body)

    def energy_breakdown(self):
        """List of (name, value) energy components ending with the total."""
        return energy_breakdown(self._lengths, self._masses, self.thetas,
                                self.omegas, self._body, gravity=self._gravity)

    def total_energy(self):
        return self.energy_breakdown()[-1][1]

    def get_state(self):
        """Copy of (thetas, omegas, time)."""
        return self.thetas.copy(), self.omegas.copy(), self.time

    def get_info(self):
        """Summary dictionary for logging."""
        return {
            "time": self.time,
            "dimension": self.dimension,
            "body": self._body.name,
            "integration_method": self._integration_method.display_name,
            "thetas": self.thetas.tolist(),
            "omegas": self.omegas.tolist(),
            "total_energy": self.total_energy(),
        }

    def __repr__(self):
        return (f"Pendulum(dimension={self.dimension}, body={self._body.name}, "
                f"method={self._integration_method.display_name}, time={self.time:.3f})")
