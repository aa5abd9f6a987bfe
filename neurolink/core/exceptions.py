"""
Exceptions raised by NeuroLink Sim
"""


class ConfigurationError(ValueError):
    """Raised when simulation parameters are invalid (bad bounds, intervals, rules)"""
