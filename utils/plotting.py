"""
Plotting helpers for pendulum runs.

- Energy components over time (from an EnergyHistory)
- Integrator comparison (energy drift and angle error)
- Animation of the chain from recorded joint positions
"""
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from physics.energy import TOTAL_LABEL


def plot_energy_history(history, title="Energy", save_path=None):
    """
    Plot every energy series of a run.

    Args:
        history: EnergyHistory instance
        title: Figure title
        save_path: Path to save figure

    Returns:
        matplotlib Figure
    """
    fig, (ax_parts, ax_total) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
    fig.suptitle(title, fontsize=16, fontweight='bold')

    for label in history.labels:
        if label == TOTAL_LABEL:
            continue
        times, values = history.as_arrays(label)
        ax_parts.plot(times, values, linewidth=1.5, label=label)
    ax_parts.set_ylabel('Energy (J)', fontsize=10)
    ax_parts.legend(loc='upper left', fontsize=8, framealpha=0.9)
    ax_parts.grid(True, alpha=0.3)
    ax_parts.set_title('Components', fontweight='bold', fontsize=11)

    times, totals = history.as_arrays(TOTAL_LABEL)
    ax_total.plot(times, totals, 'k-', linewidth=2, label=TOTAL_LABEL)
    if len(totals) > 0:
        ax_total.axhline(y=totals[0], color='r', linestyle='--', alpha=0.5,
                         label='Initial')
    ax_total.set_xlabel('Time (s)', fontsize=10)
    ax_total.set_ylabel('Energy (J)', fontsize=10)
    ax_total.legend(loc='upper left', fontsize=8, framealpha=0.9)
    ax_total.grid(True, alpha=0.3)
    ax_total.set_title('Total Energy', fontweight='bold', fontsize=11)

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"✓ Plot saved to {save_path}")

    return fig


def plot_integrator_comparison(results, save_path=None):
    """
    Compare integrators on the same configuration.

    Args:
        results: List of dicts with 'name', 'times', 'energies' and
            optionally 'angle_errors'
        save_path: Path to save figure

    Returns:
        matplotlib Figure
    """
    fig, (ax_energy, ax_error) = plt.subplots(1, 2, figsize=(16, 6))
    fig.suptitle('Integrator Comparison', fontsize=16, fontweight='bold')

    for result in results:
        energies = np.asarray(result['energies'])
        drift = energies - energies[0]
        ax_energy.plot(result['times'], drift, linewidth=2, label=result['name'])
        if result.get('angle_errors') is not None:
            ax_error.semilogy(result['times'],
                              np.maximum(result['angle_errors'], 1e-16),
                              linewidth=2, label=result['name'])

    ax_energy.axhline(y=0, color='k', linestyle='--', alpha=0.3)
    ax_energy.set_xlabel('Time (s)', fontsize=10)
    ax_energy.set_ylabel('E(t) - E(0) (J)', fontsize=10)
    ax_energy.set_title('Energy Drift', fontweight='bold', fontsize=11)
    ax_energy.legend(loc='best', fontsize=8, framealpha=0.9)
    ax_energy.grid(True, alpha=0.3)

    ax_error.set_xlabel('Time (s)', fontsize=10)
    ax_error.set_ylabel('max |θ - θ_ref| (rad)', fontsize=10)
    ax_error.set_title('Angle Error vs Reference', fontweight='bold', fontsize=11)
    ax_error.legend(loc='best', fontsize=8, framealpha=0.9)
    ax_error.grid(True, alpha=0.3)

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"✓ Plot saved to {save_path}")

    return fig


def animate_pendulum(frames, radii, total_length, dt, save_path=None,
                     title='Pendulum', trace_length=50):
    """
    Animate a recorded pendulum trajectory.

    Args:
        frames: Array of shape (n_frames, n_links, 2) with joint positions
        radii: Bulb radius per link (m)
        total_length: Reach of the chain, sets the axis extent
        dt: Time between frames (s)
        save_path: Path to save animation (gif)
        title: Axis title
        trace_length: Number of tip positions kept in the trace

    Returns:
        (fig, anim)
    """
    frames = np.asarray(frames)
    n_links = frames.shape[1]

    print(f"\nCreating animation with {len(frames)} frames...")

    fig, ax = plt.subplots(figsize=(8, 8))
    extent = 1.1 * total_length
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    ax.set_xlabel('x (m)', fontsize=12)
    ax.set_ylabel('y (m)', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')

    ax.plot([0], [0], 'ko', markersize=6)
    rods, = ax.plot([], [], 'k-', linewidth=2)
    bulbs = [plt.Circle((0, 0), radii[i], fc='steelblue', ec='black')
             for i in range(n_links)]
    for bulb in bulbs:
        ax.add_patch(bulb)
    trace, = ax.plot([], [], 'r-', alpha=0.3, linewidth=1.5)
    info_text = ax.text(0.02, 0.98, '', transform=ax.transAxes,
                        verticalalignment='top', fontsize=10,
                        bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.9))

    trace_x, trace_y = [], []

    def init():
        rods.set_data([], [])
        trace.set_data([], [])
        info_text.set_text('')
        return (rods, trace, info_text, *bulbs)

    def animate(frame):
        pos = frames[frame]
        xs = np.concatenate([[0.0], pos[:, 0]])
        ys = np.concatenate([[0.0], pos[:, 1]])
        rods.set_data(xs, ys)
        for bulb, (x, y) in zip(bulbs, pos):
            bulb.center = (x, y)

        trace_x.append(pos[-1, 0])
        trace_y.append(pos[-1, 1])
        if len(trace_x) > trace_length:
            trace_x.pop(0)
            trace_y.pop(0)
        trace.set_data(trace_x, trace_y)

        info_text.set_text(f'Time: {frame * dt:.2f}s | Frame: {frame}/{len(frames) - 1}')
        return (rods, trace, info_text, *bulbs)

    anim = FuncAnimation(fig, animate, init_func=init, frames=len(frames),
                         interval=max(1, int(1000 * dt)), blit=True)

    if save_path:
        print(f"Saving animation to {save_path}...")
        anim.save(save_path, writer='pillow', fps=min(50, max(1, int(round(1.0 / dt)))))
        print(f"✓ Animation saved!")

    return fig, anim
