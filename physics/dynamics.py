# physics/dynamics.py
"""
Equations of motion for one- and two-link pendulum chains.

Angles are ABSOLUTE, measured from the downward vertical. The double pendulum
equations come from the Lagrangian of the chain and are written as a 2x2
linear system A * alpha = b in the angular accelerations.

Only one and two links are derived here. Longer chains are rejected instead
of being integrated with wrong equations.
"""
import numpy as np

from physics.errors import SingularSystemError, UnsupportedDimensionError, ValidationError

GRAVITY = 9.81  # meters / second^2


def _torque_value(torque):
    """Accept a scalar or a sequence (first entry is used)."""
    if torque is None:
        return None
    try:
        values = np.asarray(torque, dtype=float).ravel()
    except (TypeError, ValueError) as err:
        raise ValidationError(f"Torque must be a number, got {torque!r}") from err
    if values.size == 0:
        raise ValidationError("Torque sequence is empty")
    if not np.isfinite(values[0]):
        raise ValidationError(f"Torque must be finite, got {values[0]}")
    return float(values[0])


def solve_single_link(lengths, thetas, body, gravity=GRAVITY):
    """
    Angular acceleration of a single pendulum.

    Point mass:  α = -(g / ℓ) sin θ
    Uniform rod: α = -(3g / 2ℓ) sin θ   (rod pivoting about one end)
    """
    ell = lengths[0]
    if body.compound:
        return np.array([-(3.0 * gravity / (2.0 * ell)) * np.sin(thetas[0])])
    return np.array([-(gravity / ell) * np.sin(thetas[0])])


def double_link_system(lengths, masses, thetas, omegas, body, torque=None,
                       gravity=GRAVITY):
    """
    Assemble the 2x2 system A * alpha = b of the double pendulum.

    Args:
        lengths, masses, thetas, omegas: Per-link values (2 entries each)
        body: BodyModel shared by both links
        torque: Optional generalized torque (point-mass chains only)
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        (A, b) as numpy arrays of shape (2, 2) and (2,)
    """
    m1, m2 = masses[0], masses[1]
    ell1, ell2 = lengths[0], lengths[1]
    t1, t2 = thetas[0], thetas[1]
    w1, w2 = omegas[0], omegas[1]

    delta = t1 - t2
    sin_delta = np.sin(delta)
    cos_delta = np.cos(delta)

    A = np.zeros((2, 2))
    b = np.zeros(2)

    if body.compound:
        # Uniform rods: center of mass at mid-rod, inertia m*l^2/3 about the pivot
        A[0, 0] = (m1 / 3.0 + m2) * ell1
        A[0, 1] = 0.5 * m2 * ell2 * cos_delta
        b[0] = -0.5 * m2 * ell2 * w2 * w2 * sin_delta
        b[0] -= (m1 / 2.0 + m2) * gravity * np.sin(t1)

        A[1, 0] = 0.5 * m2 * ell1 * cos_delta
        A[1, 1] = (m2 / 3.0) * ell2
        b[1] = 0.5 * m2 * ell1 * w1 * w1 * sin_delta
        b[1] -= 0.5 * m2 * gravity * np.sin(t2)
        # Torque forcing is not modelled for rods
    else:
        A[0, 0] = (m1 + m2) * ell1
        A[0, 1] = m2 * ell2 * cos_delta
        b[0] = -m2 * ell2 * w2 * w2 * sin_delta
        b[0] -= gravity * (m1 + m2) * np.sin(t1)

        A[1, 0] = m2 * ell1 * cos_delta
        A[1, 1] = m2 * ell2
        b[1] = m2 * ell1 * ell2 * w1 * w1 * sin_delta
        b[1] -= ell2 * m2 * gravity * np.sin(t2)

        tau = _torque_value(torque)
        if tau is not None:
            b[0] += tau * delta / ell1
            b[1] -= tau * delta / ell2

    return A, b


def solve_double_link(lengths, masses, thetas, omegas, body, torque=None,
                      gravity=GRAVITY):
    """Angular accelerations of a double pendulum."""
    A, b = double_link_system(lengths, masses, thetas, omegas, body,
                              torque=torque, gravity=gravity)
    try:
        return np.linalg.solve(A, b)
    except np.linalg.LinAlgError as err:
        raise SingularSystemError(
            f"Mass matrix is singular for lengths={list(lengths)}, "
            f"masses={list(masses)}"
        ) from err


def compute_angular_accelerations(lengths, masses, thetas, omegas, body,
                                  torque=None, gravity=GRAVITY):
    """
    Compute angular accelerations (alphas) for the given state.

    Pure function: the arrays passed in are never modified, so it can be
    evaluated at intermediate integrator stages as well as at the committed
    state.

    Args:
        lengths: Link lengths (m)
        masses: Link masses (kg)
        thetas: Absolute link angles (rad)
        omegas: Angular velocities (rad/s)
        body: BodyModel (PointMass or UniformRod)
        torque: Optional external generalized torque
        gravity: Gravitational acceleration (m/s^2)

    Returns:
        alphas: Array of angular accelerations (rad/s^2), one per link

    Raises:
        ValidationError: Torque is empty or not a finite number
        UnsupportedDimensionError: Chain has neither one nor two links
        SingularSystemError: Double pendulum mass matrix is singular
    """
    torque = _torque_value(torque)
    dimension = len(lengths)
    if dimension == 1:
        return solve_single_link(lengths, thetas, body, gravity=gravity)
    elif dimension == 2:
        return solve_double_link(lengths, masses, thetas, omegas, body,
                                 torque=torque, gravity=gravity)
    raise UnsupportedDimensionError(dimension)
