"""
Snapshot post-processing

Bounded trend history used by the charts and metric cards.
"""

from .history import HistoryBuffer

__all__ = ['HistoryBuffer']
