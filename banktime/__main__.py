#!/usr/bin/env python3
"""
Convenience entry point for running banktime directly.

Usage: python -m banktime [command] [options]
"""

from banktime.cli.app import app

if __name__ == "__main__":
    app()
