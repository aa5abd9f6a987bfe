"""
Test helpers shared across modules
"""
from datetime import datetime

import numpy as np

from neurolink.core.config import INITIAL_SNAPSHOT
from neurolink.detection.state_classifier import StateClassifier

CLOCK_START = datetime(2024, 1, 1, 10, 30, 0)


def make_snapshot(stress=25.0, fatigue=15.0, focus=82.0, **changes):
    """Seed snapshot with the classifier-relevant fields replaced"""
    return INITIAL_SNAPSHOT.evolve(stress=stress, fatigue=fatigue, focus=focus, **changes)


class FixedRandom:
    """Stand-in RNG returning the same uniform draw for every field"""

    def __init__(self, value):
        self.value = value

    def random(self, size):
        return np.full(size, self.value)


class RecordingClassifier(StateClassifier):
    """Classifier that remembers every snapshot it was asked about"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.seen = []

    def classify(self, snapshot):
        self.seen.append(snapshot)
        return super().classify(snapshot)
