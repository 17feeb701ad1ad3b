#!/usr/bin/env python3
"""Play Echoes of Command in the terminal.

Usage:
    python play.py

Settings come from the environment or a .env file, e.g.
    CHOICE_TIMEOUT_SECONDS=0 python play.py          # no per-level timeout
    DATABASE_URL=sqlite+aiosqlite:///./scores.db python play.py
"""

from echoes.main import run

if __name__ == "__main__":
    run()
