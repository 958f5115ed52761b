"""Entry point for running the harness with 'python -m fourier'."""

import sys

from .harness import main

if __name__ == "__main__":
    sys.exit(main())
