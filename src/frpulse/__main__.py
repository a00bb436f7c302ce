"""
Main entry point for running frpulse-manager as a module.

Usage:
    python -m frpulse proxy list myclient
    python -m frpulse proxy add myclient --local-port 8080 --remote-port 80
"""

from .cli import cli

if __name__ == "__main__":
    cli()
