#!/usr/bin/env python3
"""FocusDeck — entry point.

Run with:
    python main.py
    python -m focusdeck
"""

from focusdeck.__main__ import main


if __name__ == "__main__":
    main()
