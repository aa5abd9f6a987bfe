"""
Main entry point for NeuroLink Sim package

This allows running the package with: python -m neurolink
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
