"""Client setup shared by CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, TypeVar

import typer
import yaml
from pydantic import ValidationError

from gs2_matchmaking.cli.utils.output import print_error
from gs2_matchmaking.client import Gs2ClientError, Gs2MatchmakingClient
from gs2_matchmaking.config import ClientConfig

T = TypeVar("T")

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Client configuration file (defaults to GS2_* environment variables)",
        dir_okay=False,
    ),
]

AccessTokenOption = Annotated[
    str,
    typer.Option(
        "--access-token",
        "-t",
        help="Player access token",
        envvar="GS2_ACCESS_TOKEN",
    ),
]


def load_config(config_path: Path | None) -> ClientConfig:
    """Load client configuration or exit with an error message."""
    try:
        return ClientConfig.load(str(config_path) if config_path else None)
    except FileNotFoundError:
        print_error(f"Configuration file not found: {config_path}")
        raise typer.Exit(1)
    except yaml.YAMLError as e:
        print_error(f"Invalid YAML syntax: {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def run_with_client(
    config_path: Path | None,
    call: Callable[[Gs2MatchmakingClient], Awaitable[T]],
) -> T:
    """Open a client, await `call(client)` and return its result.

    Client errors are printed and turned into exit status 1.
    """
    config = load_config(config_path)

    async def _run() -> T:
        async with Gs2MatchmakingClient.from_config(config) as client:
            return await call(client)

    try:
        return asyncio.run(_run())
    except Gs2ClientError as e:
        print_error(str(e))
        raise typer.Exit(1)
