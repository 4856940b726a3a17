#!/usr/bin/env python3
"""
Turkey sweeper - main entry point.

Usage:
    python main.py [--size N] [--mines M] [--seed S] [--verbose]
"""
from src.sweeper.cli import main


if __name__ == "__main__":
    main()
