"""
Energy time series recorder.

Feeds the plotting collaborator: one series per energy component, sampled
against simulated time, with only the latest max_length samples retained.
"""
from typing import Dict, List, Sequence, Tuple

import numpy as np


class EnergyHistory:
    """
    Rolling record of energy components over simulated time.

    Example:
        history = EnergyHistory.for_pendulum(pendulum)
        pendulum.run(200, 0.005, callback=history.record)
        times, totals = history.as_arrays("Total energy")
    """

    def __init__(self, labels: Sequence[str], max_length: int = 1000):
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self.max_length = int(max_length)
        self._series: Dict[str, List[Tuple[float, float]]] = {
            label: [] for label in labels
        }

    @classmethod
    def for_pendulum(cls, pendulum, max_length: int = 1000) -> "EnergyHistory":
        labels = [name for name, _ in pendulum.energy_breakdown()]
        return cls(labels, max_length=max_length)

    @property
    def labels(self) -> List[str]:
        return list(self._series)

    def record(self, pendulum):
        """Append one sample per component at the pendulum's current time."""
        t = pendulum.time
        for name, value in pendulum.energy_breakdown():
            if name not in self._series:
                raise KeyError(f"Unknown energy component: {name}")
            self._series[name].append((t, value))
        self.trim()

    def trim(self):
        for label, data in self._series.items():
            if len(data) > self.max_length:
                self._series[label] = data[len(data) - self.max_length:]

    def as_arrays(self, label: str) -> Tuple[np.ndarray, np.ndarray]:
        """Return (times, values) arrays for one component."""
        data = self._series[label]
        if not data:
            return np.array([]), np.array([])
        times, values = zip(*data)
        return np.array(times), np.array(values)

    def clear(self):
        for label in self._series:
            self._series[label] = []

    def __len__(self):
        if not self._series:
            return 0
        return max(len(data) for data in self._series.values())
