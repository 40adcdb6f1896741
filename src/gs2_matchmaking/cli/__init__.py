"""CLI module for the GS2 Matchmaking client.

This module provides command-line tools for managing matchmaking
definitions, driving gatherings and validating client configuration.

Usage:
    uv run python -m gs2_matchmaking.cli --help
    uv run python -m gs2_matchmaking.cli matchmaking list --config gs2.yaml
    uv run python -m gs2_matchmaking.cli gathering room-list ranked -t TOKEN
"""

from gs2_matchmaking.cli.main import app

__all__ = ["app"]
