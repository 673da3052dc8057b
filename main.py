#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--preset NAME | --size N --mines M] [--seed S]
    python main.py simulate [--games N] [--seed S]
"""
import sys

from src.minefield.cli import main


if __name__ == "__main__":
    sys.exit(main())
