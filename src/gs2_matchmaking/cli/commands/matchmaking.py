"""Matchmaking subcommands for managing matchmaking definitions."""

from __future__ import annotations

from typing import Annotated, Any

import typer

from gs2_matchmaking.cli.utils.output import (
    console,
    create_matchmaking_panel,
    create_matchmaking_table,
    print_success,
)
from gs2_matchmaking.cli.utils.session import ConfigOption, run_with_client
from gs2_matchmaking.client import Gs2MatchmakingClient
from gs2_matchmaking.models import Matchmaking

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_matchmaking(
    config_path: ConfigOption = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Maximum items per page"),
    ] = None,
    page_token: Annotated[
        str | None,
        typer.Option("--page-token", help="Page token from a previous listing"),
    ] = None,
    all_pages: Annotated[
        bool,
        typer.Option("--all", "-a", help="Follow page tokens to list everything"),
    ] = False,
) -> None:
    """List matchmaking definitions.

    Examples:
        gs2-matchmaking matchmaking list
        gs2-matchmaking matchmaking list --all --config gs2.yaml
    """

    async def call(
        client: Gs2MatchmakingClient,
    ) -> tuple[list[Matchmaking], str | None]:
        if all_pages:
            return [item async for item in client.iter_matchmaking(limit)], None
        page = await client.describe_matchmaking(page_token, limit)
        return page.items, page.next_page_token

    items, next_page_token = run_with_client(config_path, call)

    if not items:
        console.print("No matchmaking found")
        return

    console.print(create_matchmaking_table(items))
    if next_page_token:
        console.print(f"Next page token: {next_page_token}")


@app.command("show")
def show_matchmaking(
    name: Annotated[str, typer.Argument(help="Matchmaking name")],
    config_path: ConfigOption = None,
) -> None:
    """Show a matchmaking definition."""
    response = run_with_client(
        config_path,
        lambda client: client.get_matchmaking({"matchmakingName": name}),
    )
    console.print(create_matchmaking_panel(response.item))


@app.command("status")
def matchmaking_status(
    name: Annotated[str, typer.Argument(help="Matchmaking name")],
    config_path: ConfigOption = None,
) -> None:
    """Show the provisioning status of a matchmaking definition."""
    response = run_with_client(
        config_path,
        lambda client: client.get_matchmaking_status({"matchmakingName": name}),
    )
    console.print(f"{name}: {response.status}")


@app.command("create")
def create_matchmaking(
    name: Annotated[str, typer.Argument(help="Matchmaking name")],
    matchmaking_type: Annotated[
        str,
        typer.Option("--type", help="Matchmaking mode"),
    ],
    max_player: Annotated[
        int,
        typer.Option("--max-player", "-m", min=2, help="Players per gathering"),
    ],
    service_class: Annotated[
        str | None,
        typer.Option("--service-class", help="Service class"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Description"),
    ] = None,
    callback: Annotated[
        str | None,
        typer.Option("--callback", help="Completion callback URL"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Create a matchmaking definition.

    Examples:
        gs2-matchmaking matchmaking create ranked --type anybody --max-player 4
    """
    request: dict[str, Any] = {
        "name": name,
        "type": matchmaking_type,
        "maxPlayer": max_player,
    }
    request.update(
        _optional_fields(
            serviceClass=service_class, description=description, callback=callback
        )
    )

    response = run_with_client(
        config_path, lambda client: client.create_matchmaking(request)
    )
    print_success(f"Created matchmaking '{response.item.name}'")
    console.print(create_matchmaking_panel(response.item))


@app.command("update")
def update_matchmaking(
    name: Annotated[str, typer.Argument(help="Matchmaking name")],
    service_class: Annotated[
        str | None,
        typer.Option("--service-class", help="Service class"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Description"),
    ] = None,
    callback: Annotated[
        str | None,
        typer.Option("--callback", help="Completion callback URL"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Update a matchmaking definition. Only the given options are changed."""
    request: dict[str, Any] = {"matchmakingName": name}
    request.update(
        _optional_fields(
            serviceClass=service_class, description=description, callback=callback
        )
    )

    response = run_with_client(
        config_path, lambda client: client.update_matchmaking(request)
    )
    print_success(f"Updated matchmaking '{name}'")
    console.print(create_matchmaking_panel(response.item))


@app.command("delete")
def delete_matchmaking(
    name: Annotated[str, typer.Argument(help="Matchmaking name")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Delete a matchmaking definition."""
    if not yes:
        typer.confirm(f"Delete matchmaking '{name}'?", abort=True)

    run_with_client(
        config_path,
        lambda client: client.delete_matchmaking({"matchmakingName": name}),
    )
    print_success(f"Deleted matchmaking '{name}'")


@app.command("service-classes")
def service_classes(config_path: ConfigOption = None) -> None:
    """List the available service classes."""
    items = run_with_client(
        config_path, lambda client: client.describe_service_class()
    )
    for item in items:
        console.print(item)


def _optional_fields(**fields: Any) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}
