"""Module entrypoint for ``python -m kiloview``.

All argument parsing and runtime setup happen in ``kiloview.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
