"""Convenience entry point to run cryptify from a source checkout.

Allows `python main.py e|d INPUT_PATH OUTPUT_PATH` from the project root.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path so `import cryptify` works
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cryptify.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
