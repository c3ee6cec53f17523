"""
Module execution entry point.

Allows running with: python -m mcm_cli
"""

import sys
from mcm_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
