"""
Shared fixtures for the NeuroLink Sim test suite

Sessions run on a VirtualTimeline so timer behaviour is exact and instant.
"""
import pytest

from neurolink.core.config import SimulationConfig
from neurolink.engine.session import BCISession
from neurolink.engine.timeline import VirtualTimeline

from tests.helpers import CLOCK_START, RecordingClassifier


@pytest.fixture
def config():
    return SimulationConfig(seed=1234, clock_start=CLOCK_START)


@pytest.fixture
def timeline():
    return VirtualTimeline()


@pytest.fixture
def session(config, timeline):
    s = BCISession(config, timeline=timeline)
    yield s
    s.stop()


@pytest.fixture
def quiet_session(timeline):
    """Session whose generation tick is too slow to interfere within a test"""
    cfg = SimulationConfig(seed=1, tick_interval=1000.0, settle_delay=1.0,
                           clock_start=CLOCK_START)
    s = BCISession(cfg, timeline=timeline, classifier=RecordingClassifier())
    yield s
    s.stop()
