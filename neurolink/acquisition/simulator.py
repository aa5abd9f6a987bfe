"""
Synthetic biometric data source

This module generates the evolving biometric state of a simulated session.
No hardware is read: each snapshot is a bounded random walk away from the
previous one.
"""

import logging
from typing import Optional
import numpy as np

from ..core.config import SimulationConfig, ALL_FIELDS, snapshot_field, snapshot_from_fields
from ..core.data_types import BiometricSnapshot


class SignalGenerator:
    """
    Generate synthetic biometric snapshots for the dashboard

    Every field takes an independent uniform step of
    ``(U(0,1) - 0.5) * amplitude`` and is clamped to its configured bounds,
    so the output is always a valid snapshot however many steps are taken.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.config = config or SimulationConfig()
        if rng is None:
            rng = np.random.default_rng(self.config.seed if seed is None else seed)
        self.rng = rng
        self.n_steps = 0

    def next(self, prev: BiometricSnapshot) -> BiometricSnapshot:
        """
        Derive the next snapshot from the previous one

        Args:
            prev: Current snapshot (left untouched)

        Returns:
            BiometricSnapshot: New snapshot with every field inside its bounds
        """
        draws = self.rng.random(len(ALL_FIELDS))
        values = {}
        for name, u in zip(ALL_FIELDS, draws):
            rng = self.config.range_for(name)
            step = (float(u) - 0.5) * rng.amplitude
            values[name] = rng.clamp(snapshot_field(prev, name) + step)

        self.n_steps += 1
        snapshot = snapshot_from_fields(values)
        logging.debug(f"Step {self.n_steps}: focus={snapshot.focus:.1f} stress={snapshot.stress:.1f} "
                      f"fatigue={snapshot.fatigue:.1f} hr={snapshot.heart_rate:.1f}")
        return snapshot

    def walk(self, start: BiometricSnapshot, n_steps: int):
        """Yield ``n_steps`` successive snapshots starting after ``start``"""
        current = start
        for _ in range(n_steps):
            current = self.next(current)
            yield current
