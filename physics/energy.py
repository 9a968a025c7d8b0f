"""
Energy accounting for pendulum chains.

Used as a diagnostic for integrator quality only; nothing here feeds back
into the dynamics.
"""
import numpy as np

from physics.dynamics import GRAVITY
from physics.geometry import centers_of_mass, velocities

TOTAL_LABEL = "Total energy"


def energy_components(lengths, masses, thetas, omegas, body, gravity=GRAVITY):
    """
    Per-link energy terms.

    Returns:
        Dictionary with 'kinetic', 'potential' and 'rotational' arrays
        (one entry per link). 'rotational' is all zeros for point masses.
    """
    masses = np.asarray(masses, dtype=float)
    lengths = np.asarray(lengths, dtype=float)
    omegas = np.asarray(omegas, dtype=float)

    com = centers_of_mass(lengths, thetas, body)
    vel = velocities(lengths, thetas, omegas, body)

    kinetic = 0.5 * masses * np.sum(vel**2, axis=1)
    potential = masses * gravity * com[:, 1]
    rotational = np.array([
        body.rotational_energy(m, l, w) for m, l, w in zip(masses, lengths, omegas)
    ], dtype=float)

    return {
        "kinetic": kinetic,
        "potential": potential,
        "rotational": rotational,
    }


def energy_breakdown(lengths, masses, thetas, omegas, body, gravity=GRAVITY):
    """
    Named energy components in plotting order.

    Order: "Kinetic 1..n", "Potential 1..n", then "Rotational 1..n" for
    rods, then "Total energy".

    Returns:
        List of (name, value) pairs
    """
    parts = energy_components(lengths, masses, thetas, omegas, body, gravity)
    n = len(lengths)

    breakdown = []
    breakdown += [(f"Kinetic {i + 1}", float(parts["kinetic"][i])) for i in range(n)]
    breakdown += [(f"Potential {i + 1}", float(parts["potential"][i])) for i in range(n)]
    if body.compound:
        breakdown += [(f"Rotational {i + 1}", float(parts["rotational"][i])) for i in range(n)]

    total = sum(value for _, value in breakdown)
    breakdown.append((TOTAL_LABEL, total))
    return breakdown


def total_energy(lengths, masses, thetas, omegas, body, gravity=GRAVITY):
    """Total mechanical energy (J) of the chain."""
    return energy_breakdown(lengths, masses, thetas, omegas, body, gravity)[-1][1]
