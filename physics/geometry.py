"""
Geometry model: maps angular state to Cartesian quantities.

Frame convention (pendulum frame, meters):
- The chain is anchored at the origin
- θ = 0: link hanging straight down
- y increases upward, so a hanging link tip sits at (0, -ℓ)
"""
import numpy as np


def joint_positions(lengths, thetas):
    """
    Tip position of every link, accumulated along the chain.

    Args:
        lengths: Link lengths (m)
        thetas: Link angles from the downward vertical (rad)

    Returns:
        Array of shape (n, 2) with one (x, y) point per link
    """
    lengths = np.asarray(lengths, dtype=float)
    thetas = np.asarray(thetas, dtype=float)

    pos = np.zeros((len(lengths), 2))
    sx = 0.0
    sy = 0.0
    for i in range(len(lengths)):
        sx += lengths[i] * np.sin(thetas[i])
        sy -= lengths[i] * np.cos(thetas[i])
        pos[i] = (sx, sy)
    return pos


def centers_of_mass(lengths, thetas, body):
    """
    Center of mass of every link.

    For point masses this is the tip of the link. For rods the accumulator
    steps half a link, records the midpoint, then steps the other half.

    Args:
        lengths: Link lengths (m)
        thetas: Link angles (rad)
        body: BodyModel shared by all links

    Returns:
        Array of shape (n, 2)
    """
    if not body.compound:
        return joint_positions(lengths, thetas)

    lengths = np.asarray(lengths, dtype=float)
    thetas = np.asarray(thetas, dtype=float)

    com = np.zeros((len(lengths), 2))
    sx = 0.0
    sy = 0.0
    for i in range(len(lengths)):
        dx = lengths[i] * np.sin(thetas[i])
        dy = -lengths[i] * np.cos(thetas[i])
        sx += 0.5 * dx
        sy += 0.5 * dy
        com[i] = (sx, sy)
        sx += 0.5 * dx
        sy += 0.5 * dy
    return com


def velocities(lengths, thetas, omegas, body):
    """
    Linear velocity of every link's center of mass.

    Accumulates (ℓ·cos θ·ω, ℓ·sin θ·ω) along the chain. For rods the
    contribution of the current link is split in two halves around the
    recorded value, mirroring centers_of_mass(). Rotation of a rod about its
    own midpoint is not part of this velocity; the energy accountant adds it
    separately.

    Returns:
        Array of shape (n, 2)
    """
    lengths = np.asarray(lengths, dtype=float)
    thetas = np.asarray(thetas, dtype=float)
    omegas = np.asarray(omegas, dtype=float)

    vel = np.zeros((len(lengths), 2))
    vx = 0.0
    vy = 0.0
    for i in range(len(lengths)):
        cx = lengths[i] * np.cos(thetas[i]) * omegas[i]
        cy = lengths[i] * np.sin(thetas[i]) * omegas[i]
        if body.compound:
            vx += 0.5 * cx
            vy += 0.5 * cy
            vel[i] = (vx, vy)
            vx += 0.5 * cx
            vy += 0.5 * cy
        else:
            vx += cx
            vy += cy
            vel[i] = (vx, vy)
    return vel


def radii(lengths, masses, body, density):
    """Drawing radius of every link for the given body model."""
    return np.array([
        body.radius(m, l, density) for l, m in zip(lengths, masses)
    ], dtype=float)


def total_length(lengths, link_radii):
    """Reach of the chain including the last bulb, used for display scaling."""
    return float(np.sum(lengths) + link_radii[-1])
