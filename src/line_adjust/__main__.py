from __future__ import annotations

import sys

from line_adjust.cli import main

if __name__ == "__main__":
    sys.exit(main())
