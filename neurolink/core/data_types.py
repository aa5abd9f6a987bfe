"""
Core data types for NeuroLink Sim

This module defines the fundamental data structures used throughout the system
for representing biometric snapshots, chart history and mental states.
"""

from dataclasses import dataclass, replace

# Mental state labels produced by the default classifier rules
FOCUSED = "focused"
STRESSED = "stressed"
TIRED = "tired"
DISTRACTED = "distracted"


@dataclass(frozen=True)
class EEGBands:
    """Relative power of the four displayed EEG bands (0-100)"""
    alpha: float = 0.0
    beta: float = 0.0
    theta: float = 0.0
    delta: float = 0.0


@dataclass(frozen=True)
class BiometricSnapshot:
    """
    One immutable reading of every biometric field at a point in simulated time

    New readings are derived from the previous one by the signal generator;
    use ``evolve`` to build a modified copy in tests or tools.
    """
    eeg: EEGBands
    heart_rate: float   # bpm, 60..100
    stress: float       # 0..100
    focus: float        # 0..100
    fatigue: float      # 0..100

    def evolve(self, **changes) -> "BiometricSnapshot":
        return replace(self, **changes)


@dataclass(frozen=True)
class HistoryPoint:
    """Container for a single point of the trend chart"""
    timestamp: str      # "HH:MM" or "HH:MM:SS" label
    focus: float
    stress: float
    heart_rate: float

    @classmethod
    def from_snapshot(cls, timestamp: str, snapshot: BiometricSnapshot) -> "HistoryPoint":
        return cls(
            timestamp=timestamp,
            focus=snapshot.focus,
            stress=snapshot.stress,
            heart_rate=snapshot.heart_rate,
        )


@dataclass(frozen=True)
class MentalState:
    """Container for a classified mental state and its advisory message"""
    label: str
    message: str = ""
