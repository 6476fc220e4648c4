"""stringbird - entry point.

Runs the command-line interface, so the tool can be used from a checkout
without installing it:

    python main.py extract src/app.tsx
    python main.py apply src/app.tsx
    python main.py serve
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from stringbird.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
