"""
Session engine

Scheduler, timelines and the BCISession facade.
"""

from .timeline import Timeline, RealTimeline, VirtualTimeline
from .session import BCISession, SessionScheduler, IDLE, RUNNING

__all__ = [
    'Timeline', 'RealTimeline', 'VirtualTimeline',
    'BCISession', 'SessionScheduler', 'IDLE', 'RUNNING',
]
