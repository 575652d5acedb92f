#!/usr/bin/env python3
"""
filescan entry point: python -m filescan scan FILE...
"""
from .cli import cli

if __name__ == "__main__":
    cli()
