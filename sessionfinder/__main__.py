"""
Convenience entry point for running sessionfinder directly.

Usage: python -m sessionfinder [command] [options]
"""

from sessionfinder.cli.app import app

if __name__ == "__main__":
    app()
