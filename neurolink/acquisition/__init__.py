"""
Biometric data sources

Synthetic generation only: the simulator never reads real sensors.
"""

from .simulator import SignalGenerator

__all__ = ['SignalGenerator']
