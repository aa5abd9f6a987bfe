"""
Tests for the rule-based mental state classifier
"""
import pytest

from neurolink.core.config import SimulationConfig
from neurolink.core.data_types import MentalState, FOCUSED, STRESSED, TIRED, DISTRACTED
from neurolink.core.exceptions import ConfigurationError
from neurolink.detection.state_classifier import (
    StateClassifier, ClassifierRule, default_rules,
    STRESSED_MESSAGE, TIRED_MESSAGE, FOCUSED_MESSAGE, DISTRACTED_MESSAGE,
)

from tests.helpers import make_snapshot


@pytest.fixture
def classifier():
    return StateClassifier()


def test_stress_rule_wins_over_all_others(classifier):
    state = classifier.classify(make_snapshot(stress=70, fatigue=80, focus=90))
    assert state == MentalState(STRESSED, STRESSED_MESSAGE)


def test_fatigue_rule_wins_over_focus(classifier):
    state = classifier.classify(make_snapshot(stress=30, fatigue=80, focus=90))
    assert state == MentalState(TIRED, TIRED_MESSAGE)


def test_fatigue_rule_wins_over_low_focus(classifier):
    state = classifier.classify(make_snapshot(stress=30, fatigue=75, focus=10))
    assert state.label == TIRED


def test_high_focus(classifier):
    state = classifier.classify(make_snapshot(stress=30, fatigue=20, focus=85))
    assert state == MentalState(FOCUSED, FOCUSED_MESSAGE)


def test_low_focus(classifier):
    state = classifier.classify(make_snapshot(stress=30, fatigue=20, focus=35))
    assert state == MentalState(DISTRACTED, DISTRACTED_MESSAGE)


def test_no_rule_matches(classifier):
    assert classifier.classify(make_snapshot(stress=30, fatigue=20, focus=60)) is None


@pytest.mark.parametrize("stress, fatigue, focus", [
    (60, 20, 60),   # stress threshold is strict
    (30, 70, 60),   # fatigue threshold is strict
    (30, 20, 80),   # high focus threshold is strict
    (30, 20, 40),   # low focus threshold is strict
])
def test_thresholds_are_strict(classifier, stress, fatigue, focus):
    assert classifier.classify(make_snapshot(stress=stress, fatigue=fatigue, focus=focus)) is None


def test_just_past_thresholds(classifier):
    assert classifier.classify(make_snapshot(stress=60.01, fatigue=0, focus=60)).label == STRESSED
    assert classifier.classify(make_snapshot(stress=0, fatigue=70.01, focus=60)).label == TIRED
    assert classifier.classify(make_snapshot(stress=0, fatigue=0, focus=80.01)).label == FOCUSED
    assert classifier.classify(make_snapshot(stress=0, fatigue=0, focus=39.99)).label == DISTRACTED


def test_resolve_keeps_previous_state_when_nothing_matches(classifier):
    previous = MentalState(STRESSED, STRESSED_MESSAGE)
    neutral = make_snapshot(stress=30, fatigue=20, focus=60)
    assert classifier.resolve(neutral, previous) is previous


def test_resolve_returns_new_state_on_match(classifier):
    previous = MentalState(STRESSED, STRESSED_MESSAGE)
    assert classifier.resolve(make_snapshot(stress=10, fatigue=10, focus=90), previous).label == FOCUSED


def test_classification_is_deterministic(classifier):
    snapshot = make_snapshot(stress=45, fatigue=72, focus=33)
    assert classifier.classify(snapshot) == classifier.classify(snapshot)
    assert StateClassifier().classify(snapshot) == classifier.classify(snapshot)


def test_every_rule_has_its_own_message():
    messages = [rule.message for rule in default_rules()]
    assert len(set(messages)) == len(messages)
    assert all(messages)


def test_thresholds_come_from_config():
    config = SimulationConfig(stress_threshold=20.0, focus_low_threshold=70.0)
    classifier = StateClassifier.from_config(config)
    assert classifier.classify(make_snapshot(stress=25, fatigue=10, focus=90)).label == STRESSED
    assert classifier.classify(make_snapshot(stress=10, fatigue=10, focus=65)).label == DISTRACTED


def test_custom_rules_and_labels():
    rules = [ClassifierRule("heart_rate", ">", 95.0, "aroused", "Heart rate is high.")]
    classifier = StateClassifier(rules)
    assert classifier.classify(make_snapshot(heart_rate=97.0)) == MentalState("aroused", "Heart rate is high.")
    assert classifier.classify(make_snapshot(heart_rate=80.0)) is None


def test_rules_can_read_eeg_bands():
    rule = ClassifierRule("alpha", ">", 60.0, "relaxed", "Alpha is up.")
    assert rule.matches(make_snapshot())  # seed alpha is 65


def test_unknown_rule_field_is_rejected():
    with pytest.raises(ConfigurationError):
        ClassifierRule("mood", ">", 1.0, "x", "y")


def test_unknown_rule_operator_is_rejected():
    with pytest.raises(ConfigurationError):
        ClassifierRule("stress", ">=", 1.0, "x", "y")


def test_empty_rule_set_is_rejected():
    with pytest.raises(ConfigurationError):
        StateClassifier([])
