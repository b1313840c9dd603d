#!/usr/bin/env python3
"""
Convenience entry point for running venuebooking directly.

Usage: python -m venuebooking [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
