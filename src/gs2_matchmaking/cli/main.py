"""Main CLI application and entry point.

This module defines the main Typer application and aggregates all
command groups (matchmaking, gathering, config).
"""

import logging
from typing import Annotated

import typer

from gs2_matchmaking.cli.commands import config as config_commands
from gs2_matchmaking.cli.commands import gathering as gathering_commands
from gs2_matchmaking.cli.commands import matchmaking as matchmaking_commands

app = typer.Typer(
    name="gs2-matchmaking",
    help="Command-line client for GS2 Matchmaking",
    no_args_is_help=True,
    pretty_exceptions_enable=True,
)

# Add command groups
app.add_typer(
    matchmaking_commands.app, name="matchmaking", help="Matchmaking definitions"
)
app.add_typer(gathering_commands.app, name="gathering", help="Player gatherings")
app.add_typer(config_commands.app, name="config", help="Configuration utilities")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log requests and responses"),
    ] = False,
) -> None:
    """GS2 Matchmaking CLI.

    Use the subcommands to manage matchmaking definitions, drive
    gatherings as a player, and validate configuration files.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


if __name__ == "__main__":
    app()
