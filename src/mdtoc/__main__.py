"""Module entry point for running with python -m mdtoc."""

import sys

from mdtoc.cli import main

if __name__ == "__main__":
    sys.exit(main())
