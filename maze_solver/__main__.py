"""Allow `python -m maze_solver`."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
