"""Module entrypoint for running flatconf as ``python -m flatconf``."""

from __future__ import annotations

from flatconf.cli import main


if __name__ == "__main__":
    main()
