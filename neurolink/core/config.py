"""
Configuration constants for NeuroLink Sim

This module contains all configuration parameters that users may need to customize
for their simulated session: timer cadences, history size, random-walk amplitudes,
field bounds and classifier thresholds.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from .data_types import BiometricSnapshot, EEGBands, HistoryPoint
from .exceptions import ConfigurationError

# ============================================================================
# TIMING CONFIGURATION
# ============================================================================

TICK_INTERVAL_SEC = 2.0           # New snapshot every 2 seconds
SETTLE_DELAY_SEC = 1.0            # Classify 1 second after the last snapshot change
HISTORY_CAPACITY = 20             # Points kept for the trend chart
HISTORY_EVERY_N_TICKS = 3         # Append a chart point every N generation ticks

# ============================================================================
# RANDOM WALK CONFIGURATION
# ============================================================================

EEG_BANDS = ("alpha", "beta", "theta", "delta")
SCALAR_FIELDS = ("heart_rate", "stress", "focus", "fatigue")
ALL_FIELDS = EEG_BANDS + SCALAR_FIELDS


@dataclass(frozen=True)
class FieldRange:
    """Random-walk step amplitude and clamp bounds for one field"""
    amplitude: float
    lower: float
    upper: float

    def clamp(self, value: float) -> float:
        return max(self.lower, min(self.upper, value))


# Field -> (amplitude, lower, upper)
FIELD_RANGES = {
    "alpha": FieldRange(10.0, 0.0, 100.0),
    "beta": FieldRange(10.0, 0.0, 100.0),
    "theta": FieldRange(10.0, 0.0, 100.0),
    "delta": FieldRange(10.0, 0.0, 100.0),
    "heart_rate": FieldRange(4.0, 60.0, 100.0),
    "stress": FieldRange(8.0, 0.0, 100.0),
    "focus": FieldRange(6.0, 0.0, 100.0),
    "fatigue": FieldRange(5.0, 0.0, 100.0),
}

# ============================================================================
# CLASSIFIER THRESHOLDS (strict comparisons)
# ============================================================================

STRESS_THRESHOLD = 60.0           # stress > 60 -> stressed
FATIGUE_THRESHOLD = 70.0          # fatigue > 70 -> tired
FOCUS_HIGH_THRESHOLD = 80.0       # focus > 80 -> focused
FOCUS_LOW_THRESHOLD = 40.0        # focus < 40 -> distracted

# ============================================================================
# SEED VALUES (dashboard start-up state)
# ============================================================================

INITIAL_SNAPSHOT = BiometricSnapshot(
    eeg=EEGBands(alpha=65.0, beta=78.0, theta=45.0, delta=32.0),
    heart_rate=72.0,
    stress=25.0,
    focus=82.0,
    fatigue=15.0,
)

INITIAL_HISTORY = (
    HistoryPoint("10:00", focus=75.0, stress=20.0, heart_rate=70.0),
    HistoryPoint("10:05", focus=80.0, stress=15.0, heart_rate=72.0),
    HistoryPoint("10:10", focus=85.0, stress=18.0, heart_rate=74.0),
    HistoryPoint("10:15", focus=78.0, stress=25.0, heart_rate=76.0),
    HistoryPoint("10:20", focus=82.0, stress=22.0, heart_rate=72.0),
)


@dataclass
class SimulationConfig:
    """
    Configuration for a simulated BCI session

    Every numeric constant of the simulator lives here so generator, classifier
    and scheduler can be exercised against boundary values in isolation.

    Timing:
    - tick_interval: seconds between generated snapshots
    - settle_delay: seconds of quiet after a snapshot change before classifying
    - history_every: generation ticks per appended chart point

    History:
    - history_capacity: maximum chart points retained (oldest evicted first)
    - seed_history: start with the dashboard's five demo points

    Random walk:
    - field_ranges: per-field FieldRange (amplitude, lower, upper)
    - seed: RNG seed for a reproducible session (None = fresh entropy)
    """

    # Timing
    tick_interval: float = TICK_INTERVAL_SEC
    settle_delay: float = SETTLE_DELAY_SEC

    # History
    history_capacity: int = HISTORY_CAPACITY
    history_every: int = HISTORY_EVERY_N_TICKS
    seed_history: bool = True

    # Random walk
    field_ranges: Dict[str, FieldRange] = None
    seed: Optional[int] = None
    initial_snapshot: BiometricSnapshot = None

    # Classifier
    stress_threshold: float = STRESS_THRESHOLD
    fatigue_threshold: float = FATIGUE_THRESHOLD
    focus_high_threshold: float = FOCUS_HIGH_THRESHOLD
    focus_low_threshold: float = FOCUS_LOW_THRESHOLD

    # Wall-clock origin for history labels (None = now)
    clock_start: Optional[datetime] = None

    def __post_init__(self):
        if self.field_ranges is None:
            self.field_ranges = dict(FIELD_RANGES)
        else:
            merged = dict(FIELD_RANGES)
            merged.update(self.field_ranges)
            self.field_ranges = merged

        if self.initial_snapshot is None:
            self.initial_snapshot = INITIAL_SNAPSHOT

        if self.clock_start is None:
            self.clock_start = datetime.now()

    def range_for(self, name: str) -> FieldRange:
        return self.field_ranges[name]

    def initial_history(self) -> Tuple[HistoryPoint, ...]:
        return INITIAL_HISTORY if self.seed_history else ()


def snapshot_field(snapshot: BiometricSnapshot, name: str) -> float:
    """Read a field by its flat name ("alpha", "heart_rate", ...)"""
    if name in EEG_BANDS:
        return getattr(snapshot.eeg, name)
    return getattr(snapshot, name)


def snapshot_from_fields(values: Dict[str, float]) -> BiometricSnapshot:
    """Build a snapshot from flat field values keyed as in ALL_FIELDS"""
    return BiometricSnapshot(
        eeg=EEGBands(**{band: values[band] for band in EEG_BANDS}),
        heart_rate=values["heart_rate"],
        stress=values["stress"],
        focus=values["focus"],
        fatigue=values["fatigue"],
    )


def clamp_snapshot(config: "SimulationConfig", snapshot: BiometricSnapshot) -> BiometricSnapshot:
    """
    Pull every field of a snapshot into its configured bounds

    Raises:
        ValueError: If a field is not a finite number
    """
    values = {}
    for name in ALL_FIELDS:
        value = snapshot_field(snapshot, name)
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError(f"Snapshot field {name} must be a finite number, got {value!r}")
        values[name] = config.range_for(name).clamp(float(value))
    return snapshot_from_fields(values)


def _check_finite(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")


def _is_positive_int(value) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_config(config: SimulationConfig) -> None:
    """
    Validate configuration parameters for common mistakes

    This catches configuration errors before the scheduler starts so a bad
    value never surfaces in the middle of a tick.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If configuration parameters are invalid
    """
    _check_finite("tick_interval", config.tick_interval)
    if config.tick_interval <= 0:
        raise ConfigurationError(f"Tick interval must be positive, got {config.tick_interval}")

    _check_finite("settle_delay", config.settle_delay)
    if config.settle_delay < 0:
        raise ConfigurationError(f"Settle delay must be >= 0, got {config.settle_delay}")

    if not _is_positive_int(config.history_capacity):
        raise ConfigurationError(f"History capacity must be a positive integer, got {config.history_capacity}")

    if not _is_positive_int(config.history_every):
        raise ConfigurationError(f"History cadence must be a positive integer, got {config.history_every}")

    missing = [name for name in ALL_FIELDS if name not in config.field_ranges]
    if missing:
        raise ConfigurationError(f"Missing field ranges: {missing}")

    unknown = [name for name in config.field_ranges if name not in ALL_FIELDS]
    if unknown:
        raise ConfigurationError(f"Unknown fields in field_ranges: {unknown}")

    for name, rng in config.field_ranges.items():
        for attr in ("amplitude", "lower", "upper"):
            _check_finite(f"{name}.{attr}", getattr(rng, attr))
        if rng.amplitude < 0:
            raise ConfigurationError(f"Amplitude for {name} must be >= 0, got {rng.amplitude}")
        if rng.lower < 0:
            raise ConfigurationError(f"Lower bound for {name} must be >= 0, got {rng.lower}")
        if rng.lower > rng.upper:
            raise ConfigurationError(f"Bounds for {name} are inverted: [{rng.lower}, {rng.upper}]")

    for name in ALL_FIELDS:
        value = snapshot_field(config.initial_snapshot, name)
        _check_finite(f"initial {name}", value)
        rng = config.field_ranges[name]
        if not rng.lower <= value <= rng.upper:
            raise ConfigurationError(
                f"Initial {name}={value} outside bounds [{rng.lower}, {rng.upper}]")

    for name in ("stress_threshold", "fatigue_threshold",
                 "focus_high_threshold", "focus_low_threshold"):
        _check_finite(name, getattr(config, name))
