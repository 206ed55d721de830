#!/usr/bin/env python3
"""Pomodesk entry point.

Run with:
    python main.py
    python -m pomodesk
"""

from pomodesk.__main__ import main


if __name__ == "__main__":
    main()
