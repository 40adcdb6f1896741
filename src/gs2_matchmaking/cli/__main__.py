"""Entry point for running the CLI as a module.

Usage:
    uv run python -m gs2_matchmaking.cli --help
"""

from gs2_matchmaking.cli.main import app

if __name__ == "__main__":
    app()
