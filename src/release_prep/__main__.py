"""Entry point for ``python -m release_prep``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover - manual execution path
    main()
