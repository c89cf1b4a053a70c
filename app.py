"""Entrypoint for running the babbler from a source checkout."""

from __future__ import annotations

from babbler.main import main

if __name__ == "__main__":
    raise SystemExit(main())
