"""
Integrator Comparison Study

Runs one configuration under Forward Euler, Semi-implicit Euler and RK4 and
measures:
1. Energy drift relative to the initial energy
2. Angle error against a high-accuracy reference (scipy DOP853)

Usage:
    python experiments/compare_integrators.py --preset single
"""
import argparse
import os
import sys
from dataclasses import replace

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from scipy.integrate import solve_ivp

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from experiments.config import PRESETS, load_config
from integrators import IntegrationMethod
from utils.plotting import plot_integrator_comparison


def reference_trajectory(pendulum, times, torque=None, rtol=1e-10, atol=1e-12):
    """
    Integrate the same equations of motion with an adaptive high-order scheme.

    Args:
        pendulum: Pendulum at its initial state (not modified)
        times: Times at which to sample the reference (s)
        torque: Constant external torque

    Returns:
        Array of shape (len(times), n) with reference angles
    """
    n = pendulum.dimension

    def rhs(t, y):
        alphas = pendulum.compute_alphas(y[:n], y[n:], torque=torque)
        return np.concatenate([y[n:], alphas])

    y0 = np.concatenate([pendulum.thetas, pendulum.omegas])
    sol = solve_ivp(rhs, (times[0], times[-1]), y0, method='DOP853',
                    t_eval=times, rtol=rtol, atol=atol)
    if not sol.success:
        raise RuntimeError(f"Reference integration failed: {sol.message}")
    return sol.y[:n].T


def run_method(config, method):
    """Run one configuration with the given integration method."""
    params = replace(config.pendulum, integration_method=method.display_name)
    pendulum = params.build()
    sim = config.simulation

    times = [pendulum.time]
    energies = [pendulum.total_energy()]
    thetas = [pendulum.thetas.copy()]
    for _ in range(sim.n_steps):
        pendulum.take_step(sim.dt, torque=sim.torque)
        times.append(pendulum.time)
        energies.append(pendulum.total_energy())
        thetas.append(pendulum.thetas.copy())

    return {
        'name': method.display_name,
        'times': np.array(times),
        'energies': np.array(energies),
        'thetas': np.array(thetas),
        'evaluations': pendulum.integrator.evaluation_count,
    }


def compare_integrators(config, verbose=True):
    """
    Compare all integration methods on one configuration.

    Returns:
        List of result dictionaries, one per method
    """
    sim = config.simulation
    results = [run_method(config, method) for method in IntegrationMethod]

    reference_pendulum = config.pendulum.build()
    ref = reference_trajectory(reference_pendulum, results[0]['times'], torque=sim.torque)

    for result in results:
        result['angle_errors'] = np.max(np.abs(result['thetas'] - ref), axis=1)
        result['max_energy_drift'] = np.max(np.abs(result['energies'] - result['energies'][0]))

    if verbose:
        print(f"\n{'='*72}")
        print(f"Integrator comparison: {config.name} (dt={sim.dt}s, steps={sim.n_steps})")
        print(f"{'='*72}")
        print(f"{'Method':<22}{'max |ΔE| (J)':>16}{'final ΔE (J)':>16}"
              f"{'max angle err':>16}")
        for result in results:
            final_drift = result['energies'][-1] - result['energies'][0]
            print(f"{result['name']:<22}{result['max_energy_drift']:>16.6f}"
                  f"{final_drift:>+16.6f}{np.max(result['angle_errors']):>16.3e}")
        print(f"{'='*72}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Compare integration methods")
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--config', type=str, help="Path to a yaml experiment config")
    group.add_argument('--preset', type=str, choices=sorted(PRESETS), default='single')
    parser.add_argument('--output', type=str, default='results/integrators')
    args = parser.parse_args()

    config = load_config(args.config) if args.config else PRESETS[args.preset]()

    os.makedirs(args.output, exist_ok=True)
    results = compare_integrators(config)

    plot_integrator_comparison(results, save_path=os.path.join(
        args.output, f"{config.name}_comparison.png"))
    plt.close()


if __name__ == '__main__':
    main()
