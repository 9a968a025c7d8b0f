"""
Pendulum Simulation Runner

Steps a pendulum configuration at a fixed dt, records the energy components
and produces an energy plot (and optionally an animation).

Usage:
    python experiments/run_simulation.py --preset double
    python experiments/run_simulation.py --config experiments/configs/double_compound_pendulum.yaml --animate
"""
import argparse
import os
import sys
from datetime import datetime

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from experiments.config import PRESETS, load_config
from simulation.energy_history import EnergyHistory
from utils.plotting import animate_pendulum, plot_energy_history


def run_simulation(config, record_frames=False, frame_every=4, verbose=True):
    """
    Run a single simulation.

    Args:
        config: ExperimentConfig
        record_frames: Keep joint positions for animation
        frame_every: Keep one frame every this many steps
        verbose: Print progress

    Returns:
        Dictionary with pendulum, energy history and summary metrics
    """
    sim = config.simulation
    pendulum = config.pendulum.build()
    history = EnergyHistory.for_pendulum(pendulum, max_length=sim.history_length)
    history.record(pendulum)

    if verbose:
        print(f"\n{'='*60}")
        print(f"Running Simulation: {config.name}")
        print(f"{'='*60}")
        print(f"  {pendulum}")
        print(f"  dt={sim.dt}s, steps={sim.n_steps}, torque={sim.torque}")

    initial_energy = pendulum.total_energy()
    frames = [pendulum.joint_positions()] if record_frames else None

    for step in range(sim.n_steps):
        pendulum.take_step(sim.dt, torque=sim.torque)
        history.record(pendulum)
        if record_frames and (step + 1) % frame_every == 0:
            frames.append(pendulum.joint_positions())

        if verbose and (step + 1) % max(1, sim.n_steps // 10) == 0:
            thetas_deg = ", ".join(f"{np.degrees(t):.1f}°" for t in pendulum.thetas)
            print(f"  Step {step+1}/{sim.n_steps}: t={pendulum.time:.2f}s, "
                  f"θ=[{thetas_deg}], E={pendulum.total_energy():.4f}J")

    final_energy = pendulum.total_energy()
    energy_drift = final_energy - initial_energy

    if verbose:
        print(f"\n{'='*60}")
        print("Results:")
        print(f"  Simulated time: {pendulum.time:.2f}s")
        print(f"  Initial energy: {initial_energy:.6f} J")
        print(f"  Final energy:   {final_energy:.6f} J")
        print(f"  Energy drift:   {energy_drift:+.6f} J")
        print(f"  Derivative evaluations: {pendulum.integrator.evaluation_count}")
        print(f"{'='*60}")

    return {
        'name': config.name,
        'pendulum': pendulum,
        'history': history,
        'frames': np.array(frames) if record_frames else None,
        'frame_dt': sim.dt * frame_every,
        'initial_energy': initial_energy,
        'final_energy': final_energy,
        'energy_drift': energy_drift,
    }


def main():
    parser = argparse.ArgumentParser(description="Run a pendulum simulation")
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--config', type=str, help="Path to a yaml experiment config")
    group.add_argument('--preset', type=str, choices=sorted(PRESETS), default='single',
                       help="Built-in configuration")
    parser.add_argument('--method', type=str, default=None,
                        help="Override integration method (forward, semi, runge-kutta)")
    parser.add_argument('--animate', action='store_true', help="Save an animation gif")
    parser.add_argument('--output', type=str, default='results', help="Results root directory")
    args = parser.parse_args()

    if args.config:
        config = load_config(args.config)
    else:
        config = PRESETS[args.preset]()
    if args.method:
        config.pendulum.integration_method = args.method

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_dir = os.path.join(args.output, f"{config.name}_{timestamp}")
    os.makedirs(results_dir, exist_ok=True)
    print(f"\nResults will be saved to: {results_dir}")

    result = run_simulation(config, record_frames=args.animate)

    plot_energy_history(result['history'], title=f"Energy - {config.name}",
                        save_path=os.path.join(results_dir, 'energy.png'))
    plt.close()

    if args.animate:
        pendulum = result['pendulum']
        fig, _ = animate_pendulum(result['frames'], pendulum.radii, pendulum.total_length,
                                  result['frame_dt'], title=config.name,
                                  save_path=os.path.join(results_dir, 'animation.gif'))
        plt.close(fig)

    print("\n✓ Simulation complete!")


if __name__ == "__main__":
    main()
