"""
Mental state detection

This module implements the rule-based classifier behind the AI assistant.
"""

from .state_classifier import StateClassifier, ClassifierRule, default_rules

__all__ = ['StateClassifier', 'ClassifierRule', 'default_rules']
