#!/usr/bin/env python3
"""
filescan Entry Point
"""
from filescan.cli import cli

if __name__ == '__main__':
    cli()
