#!/usr/bin/env python3
"""Entry point for the Headshot Studio GUI when running from a source checkout."""

import os
import sys

SRC = os.path.dirname(os.path.abspath(__file__))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from headshotstudio.ui.main_window import run

if __name__ == "__main__":
    run()
