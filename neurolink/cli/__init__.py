"""
Command-line interface for NeuroLink Sim
"""

from .main import main

__all__ = ['main']
