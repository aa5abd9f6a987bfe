"""
NeuroLink Sim - Simulated brain-computer-interface dashboard engine

Generates an evolving synthetic biometric state, keeps a bounded trend history
and drives a rule-based assistant that reacts to the simulated mental state.

Python: 3.10+
"""

__version__ = "1.0.0"

# Main package imports for easy access
from .core.data_types import EEGBands, BiometricSnapshot, HistoryPoint, MentalState
from .core.config import SimulationConfig, FieldRange, validate_config
from .core.exceptions import ConfigurationError
from .acquisition.simulator import SignalGenerator
from .processing.history import HistoryBuffer
from .detection.state_classifier import StateClassifier, ClassifierRule
from .engine.session import BCISession, SessionScheduler
from .engine.timeline import RealTimeline, VirtualTimeline

__all__ = [
    'EEGBands', 'BiometricSnapshot', 'HistoryPoint', 'MentalState',
    'SimulationConfig', 'FieldRange', 'validate_config', 'ConfigurationError',
    'SignalGenerator', 'HistoryBuffer',
    'StateClassifier', 'ClassifierRule',
    'BCISession', 'SessionScheduler',
    'RealTimeline', 'VirtualTimeline',
]
