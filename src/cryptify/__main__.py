"""Allow ``python -m cryptify e|d INPUT_PATH OUTPUT_PATH``."""

import sys

from cryptify.frontend.cli.app import main

if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
