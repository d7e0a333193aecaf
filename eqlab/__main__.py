"""Entry point for `python -m eqlab`."""
import sys

from eqlab.cli import main

if __name__ == "__main__":
    sys.exit(main())
