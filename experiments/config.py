"""
Configuration management for experiments
"""
import yaml
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, List, Optional
import numpy as np

from physics.bodies import DENSITY
from physics.dynamics import GRAVITY
from physics.errors import ValidationError
from integrators import IntegrationMethod


@dataclass
class PendulumParams:
    """Physical parameters and initial state of the pendulum chain."""
    lengths: List[float] = field(default_factory=lambda: [1.0])        # Link lengths (m)
    masses: List[float] = field(default_factory=lambda: [2.0])         # Link masses (kg)
    thetas: List[float] = field(default_factory=lambda: [np.pi / 2])   # Initial angles (rad)
    omegas: List[float] = field(default_factory=lambda: [0.0])         # Initial angular velocities (rad/s)
    integration_method: str = "semi"   # 'forward' | 'semi' | 'runge-kutta'
    compound: bool = False             # True: uniform rods, False: point-mass bulbs
    gravity: float = GRAVITY           # Gravity (m/s²)
    density: float = DENSITY           # Bulb / rod density (kg/m³)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def build(self):
        """Create the Pendulum described by these parameters."""
        from simulation.pendulum import Pendulum

        return Pendulum(
            lengths=self.lengths,
            masses=self.masses,
            thetas=self.thetas,
            omegas=self.omegas,
            integration_method=self.integration_method,
            compound=self.compound,
            gravity=self.gravity,
            density=self.density,
        )


@dataclass
class SimulationConfig:
    """Stepping configuration for a driver run."""
    dt: float = 0.005                  # Time step (s)
    duration: float = 10.0             # Simulated time (s)
    torque: Optional[float] = None     # Constant external torque, None for free motion
    history_length: int = 1000         # Samples kept per energy series

    @property
    def n_steps(self) -> int:
        return int(round(self.duration / self.dt))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExperimentConfig:
    """Complete experiment: pendulum plus stepping configuration."""
    name: str = "single_pendulum"
    pendulum: PendulumParams = field(default_factory=PendulumParams)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'pendulum': self.pendulum.to_dict(),
            'simulation': self.simulation.to_dict(),
        }


def _build_section(cls, data, section):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValidationError(f"Section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValidationError(f"Unknown keys in '{section}': {sorted(unknown)}")
    try:
        return cls(**data)
    except TypeError as err:
        raise ValidationError(f"Invalid '{section}' section: {err}") from err


def config_from_dict(data: Dict[str, Any]) -> ExperimentConfig:
    """
    Build an ExperimentConfig from a plain dictionary (e.g. parsed yaml).

    Raises:
        ValidationError: Unknown keys, wrong section types or bad values
    """
    if not isinstance(data, dict):
        raise ValidationError("Configuration must be a mapping")
    unknown = set(data) - {'name', 'pendulum', 'simulation'}
    if unknown:
        raise ValidationError(f"Unknown top-level keys: {sorted(unknown)}")

    pendulum = _build_section(PendulumParams, data.get('pendulum'), 'pendulum')
    simulation = _build_section(SimulationConfig, data.get('simulation'), 'simulation')

    # Fail early on misspelled schemes
    IntegrationMethod.from_name(pendulum.integration_method)
    if not simulation.dt > 0:
        raise ValidationError(f"dt must be positive, got {simulation.dt}")
    if simulation.duration < 0:
        raise ValidationError(f"duration must be non-negative, got {simulation.duration}")

    return ExperimentConfig(
        name=str(data.get('name', ExperimentConfig.name)),
        pendulum=pendulum,
        simulation=simulation,
    )


def load_config(path) -> ExperimentConfig:
    """Load an experiment configuration from a yaml file."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    return config_from_dict(data or {})


def save_config(config: ExperimentConfig, path):
    """Write an experiment configuration to a yaml file."""
    data = config.to_dict()
    # yaml.safe_dump cannot represent numpy scalars
    data['pendulum'] = {
        k: ([float(x) for x in v] if isinstance(v, (list, tuple, np.ndarray)) else v)
        for k, v in data['pendulum'].items()
    }
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, sort_keys=False)


def single_pendulum(integration_method: str = "runge-kutta") -> ExperimentConfig:
    """Single bulb pendulum released from horizontal."""
    return ExperimentConfig(
        name="single_pendulum",
        pendulum=PendulumParams(
            lengths=[1.0],
            masses=[2.0],
            thetas=[np.pi / 2],
            omegas=[0.0],
            integration_method=integration_method,
        ),
    )


def double_pendulum(integration_method: str = "runge-kutta",
                    compound: bool = False) -> ExperimentConfig:
    """Double pendulum with both links released from horizontal."""
    return ExperimentConfig(
        name="double_pendulum" if not compound else "double_compound_pendulum",
        pendulum=PendulumParams(
            lengths=[1.0, 1.0],
            masses=[2.0, 1.0],
            thetas=[np.pi / 2, np.pi / 2],
            omegas=[0.0, 0.0],
            integration_method=integration_method,
            compound=compound,
        ),
    )


PRESETS = {
    'single': single_pendulum,
    'double': double_pendulum,
    'double-compound': lambda integration_method="runge-kutta": double_pendulum(
        integration_method, compound=True),
}
