"""
Entry point for running the validators service as a module.

Usage:
    python -m services.validators [args]
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
