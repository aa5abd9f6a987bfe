"""
Rule-based mental state detection

This module maps a biometric snapshot to a mental state label and the advisory
message the AI assistant shows for it. Rules are checked in priority order and
the first match wins; when nothing matches the previous state is kept.
"""

import logging
import operator
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core.config import SimulationConfig, ALL_FIELDS, snapshot_field
from ..core.data_types import (
    BiometricSnapshot, MentalState, FOCUSED, STRESSED, TIRED, DISTRACTED,
)
from ..core.exceptions import ConfigurationError

STRESSED_MESSAGE = ("I notice your stress levels are elevated. Would you like me to "
                    "guide you through a breathing exercise?")
TIRED_MESSAGE = ("You seem fatigued. Consider taking a short break or adjusting "
                 "your task complexity.")
FOCUSED_MESSAGE = "Great focus! You're in an optimal state for complex tasks."
DISTRACTED_MESSAGE = ("Your attention seems scattered. Let me adjust the interface "
                      "to reduce distractions.")

_OPERATORS = {
    ">": operator.gt,
    "<": operator.lt,
}


@dataclass(frozen=True)
class ClassifierRule:
    """Strict threshold test on one snapshot field"""
    field: str
    op: str
    threshold: float
    label: str
    message: str

    def __post_init__(self):
        if self.field not in ALL_FIELDS:
            raise ConfigurationError(f"Unknown rule field: {self.field!r}")
        if self.op not in _OPERATORS:
            raise ConfigurationError(f"Rule operator must be '>' or '<', got {self.op!r}")

    def matches(self, snapshot: BiometricSnapshot) -> bool:
        return _OPERATORS[self.op](snapshot_field(snapshot, self.field), self.threshold)

    @property
    def state(self) -> MentalState:
        return MentalState(self.label, self.message)


def default_rules(config: Optional[SimulationConfig] = None) -> Tuple[ClassifierRule, ...]:
    """Dashboard rules in priority order: stress, fatigue, high focus, low focus"""
    config = config or SimulationConfig()
    return (
        ClassifierRule("stress", ">", config.stress_threshold, STRESSED, STRESSED_MESSAGE),
        ClassifierRule("fatigue", ">", config.fatigue_threshold, TIRED, TIRED_MESSAGE),
        ClassifierRule("focus", ">", config.focus_high_threshold, FOCUSED, FOCUSED_MESSAGE),
        ClassifierRule("focus", "<", config.focus_low_threshold, DISTRACTED, DISTRACTED_MESSAGE),
    )


class StateClassifier:
    """
    Classify snapshots with ordered threshold rules

    The classifier holds no mutable state: the same snapshot always yields the
    same result. Ties between matching rules are broken by order, never by
    magnitude.
    """

    def __init__(self, rules: Optional[Sequence[ClassifierRule]] = None):
        self.rules = tuple(rules) if rules is not None else default_rules()
        if not self.rules:
            raise ConfigurationError("StateClassifier needs at least one rule")

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "StateClassifier":
        return cls(default_rules(config))

    def classify(self, snapshot: BiometricSnapshot) -> Optional[MentalState]:
        """
        Evaluate rules against a snapshot

        Args:
            snapshot: Snapshot to classify

        Returns:
            MentalState of the first matching rule, or None if no rule fires
        """
        for rule in self.rules:
            if rule.matches(snapshot):
                return rule.state
        return None

    def resolve(self, snapshot: BiometricSnapshot, previous: MentalState) -> MentalState:
        """Classify, keeping ``previous`` unchanged when no rule fires"""
        state = self.classify(snapshot)
        if state is None:
            logging.debug(f"No rule matched, keeping state '{previous.label}'")
            return previous
        return state
