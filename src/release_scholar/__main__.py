from __future__ import annotations

import sys

from release_scholar.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
