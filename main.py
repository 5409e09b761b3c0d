#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--seed N] [--placement {sweep,sample}]
                   [--max-sweeps N] [--log-level LEVEL]
"""
import sys

from src.game.console import main


if __name__ == "__main__":
    sys.exit(main())
