"""
Entry point for ``python -m businesstime``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
