"""PySide6 entrypoint: launches the Logo Atlas window from logo_atlas.main.

Run from the repository root with ``python main.py``; an installed package
provides the same entry point as the ``logo-atlas`` command.
"""

import sys

try:
    from logo_atlas.main import main
except ImportError as exc:
    # Provide a clear error if imports fail due to PYTHONPATH issues
    raise RuntimeError("Failed to import logo_atlas. Ensure project root is on PYTHONPATH.") from exc


if __name__ == "__main__":
    sys.exit(main())
