"""
Core data types and configuration for NeuroLink Sim

This module contains the fundamental data classes used throughout the system.
"""

from .data_types import (
    EEGBands, BiometricSnapshot, HistoryPoint, MentalState,
    FOCUSED, STRESSED, TIRED, DISTRACTED,
)
from .config import SimulationConfig, FieldRange, validate_config
from .exceptions import ConfigurationError

__all__ = [
    'EEGBands', 'BiometricSnapshot', 'HistoryPoint', 'MentalState',
    'FOCUSED', 'STRESSED', 'TIRED', 'DISTRACTED',
    'SimulationConfig', 'FieldRange', 'validate_config', 'ConfigurationError',
]
