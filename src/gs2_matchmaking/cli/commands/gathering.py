"""Gathering subcommands: join, list and close gatherings.

Commands act on behalf of a player and need the player's access token, given
with ``--access-token`` or the GS2_ACCESS_TOKEN environment variable.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

import typer

from gs2_matchmaking.cli.utils.output import (
    console,
    create_gathering_panel,
    create_gathering_table,
    print_error,
    print_success,
    print_warning,
)
from gs2_matchmaking.cli.utils.session import (
    AccessTokenOption,
    ConfigOption,
    run_with_client,
)
from gs2_matchmaking.client import Gs2MatchmakingClient
from gs2_matchmaking.models import Gathering

app = typer.Typer(no_args_is_help=True)

NameArgument = Annotated[str, typer.Argument(help="Matchmaking name")]
GatheringArgument = Annotated[str, typer.Argument(help="Gathering ID")]


class Mode(str, Enum):
    """Matchmaking mode a gathering belongs to."""

    anybody = "anybody"
    customauto = "customauto"
    passcode = "passcode"
    room = "room"


ModeOption = Annotated[
    Mode,
    typer.Option("--mode", help="Matchmaking mode of the gathering"),
]


@app.command("anybody")
def anybody(
    name: NameArgument,
    access_token: AccessTokenOption,
    config_path: ConfigOption = None,
) -> None:
    """Join any gathering waiting for players, or create one."""
    response = run_with_client(
        config_path,
        lambda client: client.anybody_do_matchmaking(
            {"matchmakingName": name, "accessToken": access_token}
        ),
    )
    console.print(create_gathering_panel(response.item))


@app.command("customauto")
def customauto(
    name: NameArgument,
    access_token: AccessTokenOption,
    attributes: Annotated[
        list[str] | None,
        typer.Option(
            "--attribute",
            help="Attribute of a newly created gathering, as N=VALUE (N is 1-5)",
        ),
    ] = None,
    minimums: Annotated[
        list[str] | None,
        typer.Option("--min", help="Lower search bound, as N=VALUE"),
    ] = None,
    maximums: Annotated[
        list[str] | None,
        typer.Option("--max", help="Upper search bound, as N=VALUE"),
    ] = None,
    search_context: Annotated[
        str | None,
        typer.Option("--search-context", help="Context of an unfinished search"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Join a gathering whose attributes fall within the search bounds.

    Examples:
        gs2-matchmaking gathering customauto ranked --min 1=1400 --max 1=1600
        gs2-matchmaking gathering customauto ranked --search-context CTX ...
    """
    request: dict[str, Any] = {"matchmakingName": name, "accessToken": access_token}
    request.update(_numbered_values("attribute{}", "--attribute", attributes))
    request.update(_numbered_values("searchAttribute{}Min", "--min", minimums))
    request.update(_numbered_values("searchAttribute{}Max", "--max", maximums))
    if search_context is not None:
        request["searchContext"] = search_context

    response = run_with_client(
        config_path, lambda client: client.custom_auto_do_matchmaking(request)
    )

    if not response.done:
        print_warning(
            "Search not finished, run again with the same bounds and "
            f"--search-context {response.search_context}"
        )
        return
    if response.item is None:
        console.print("No gathering joined")
        return
    console.print(create_gathering_panel(response.item))


@app.command("room-list")
def room_list(
    name: NameArgument,
    access_token: AccessTokenOption,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Maximum items per page"),
    ] = None,
    all_pages: Annotated[
        bool,
        typer.Option("--all", "-a", help="Follow page tokens to list everything"),
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """List Room gatherings waiting for players."""
    request = {"matchmakingName": name, "accessToken": access_token}

    async def call(client: Gs2MatchmakingClient) -> list[Gathering]:
        if all_pages:
            return [item async for item in client.iter_room_gatherings(request, limit)]
        page = await client.room_describe_gathering(request, limit=limit)
        return page.items

    items = run_with_client(config_path, call)

    if not items:
        console.print("No gatherings found")
        return
    console.print(create_gathering_table(items))


@app.command("room-create")
def room_create(
    name: NameArgument,
    access_token: AccessTokenOption,
    meta: Annotated[
        str | None,
        typer.Option("--meta", help="Metadata shown in the room list (128 bytes max)"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Create a Room gathering."""
    request = {"matchmakingName": name, "accessToken": access_token}
    if meta is not None:
        request["meta"] = meta

    response = run_with_client(
        config_path, lambda client: client.room_create_gathering(request)
    )
    print_success(f"Created gathering {response.item.gathering_id}")
    console.print(create_gathering_panel(response.item))


@app.command("room-join")
def room_join(
    name: NameArgument,
    gathering_id: GatheringArgument,
    access_token: AccessTokenOption,
    config_path: ConfigOption = None,
) -> None:
    """Join a Room gathering."""
    response = run_with_client(
        config_path,
        lambda client: client.room_join_gathering(
            {
                "matchmakingName": name,
                "gatheringId": gathering_id,
                "accessToken": access_token,
            }
        ),
    )
    console.print(create_gathering_panel(response.item))


@app.command("passcode-create")
def passcode_create(
    name: NameArgument,
    access_token: AccessTokenOption,
    config_path: ConfigOption = None,
) -> None:
    """Create a Passcode gathering and print its passcode."""
    response = run_with_client(
        config_path,
        lambda client: client.passcode_create_gathering(
            {"matchmakingName": name, "accessToken": access_token}
        ),
    )
    print_success(f"Passcode: {response.item.passcode}")
    console.print(create_gathering_panel(response.item))


@app.command("passcode-join")
def passcode_join(
    name: NameArgument,
    passcode: Annotated[str, typer.Argument(help="8-digit passcode")],
    access_token: AccessTokenOption,
    config_path: ConfigOption = None,
) -> None:
    """Join the gathering identified by a passcode."""
    if not (len(passcode) == 8 and passcode.isdigit()):
        print_warning(f"Passcode '{passcode}' is not 8 digits")

    response = run_with_client(
        config_path,
        lambda client: client.passcode_join_gathering(
            {
                "matchmakingName": name,
                "passcode": passcode,
                "accessToken": access_token,
            }
        ),
    )
    console.print(create_gathering_panel(response.item))


@app.command("players")
def players(
    name: NameArgument,
    gathering_id: GatheringArgument,
    access_token: AccessTokenOption,
    mode: ModeOption = Mode.room,
    config_path: ConfigOption = None,
) -> None:
    """List the user IDs in a gathering."""
    request = {
        "matchmakingName": name,
        "gatheringId": gathering_id,
        "accessToken": access_token,
    }

    def call(client: Gs2MatchmakingClient):
        describe = {
            Mode.anybody: client.anybody_describe_joined_user,
            Mode.customauto: client.custom_auto_describe_joined_user,
            Mode.passcode: client.passcode_describe_joined_user,
            Mode.room: client.room_describe_joined_user,
        }[mode]
        return describe(request)

    response = run_with_client(config_path, call)
    if not response.items:
        console.print("No players in gathering")
        return
    for user_id in response.items:
        console.print(user_id)


@app.command("leave")
def leave(
    name: NameArgument,
    gathering_id: GatheringArgument,
    access_token: AccessTokenOption,
    mode: ModeOption = Mode.room,
    config_path: ConfigOption = None,
) -> None:
    """Leave a gathering."""
    request = {
        "matchmakingName": name,
        "gatheringId": gathering_id,
        "accessToken": access_token,
    }

    def call(client: Gs2MatchmakingClient):
        leave_gathering = {
            Mode.anybody: client.anybody_leave_gathering,
            Mode.customauto: client.custom_auto_leave_gathering,
            Mode.passcode: client.passcode_leave_gathering,
            Mode.room: client.room_leave_gathering,
        }[mode]
        return leave_gathering(request)

    run_with_client(config_path, call)
    print_success(f"Left gathering {gathering_id}")


@app.command("breakup")
def breakup(
    name: NameArgument,
    gathering_id: GatheringArgument,
    access_token: AccessTokenOption,
    mode: ModeOption = Mode.room,
    config_path: ConfigOption = None,
) -> None:
    """Break up a Room or Passcode gathering you created."""
    request = _owner_request(mode, name, gathering_id, access_token)

    def call(client: Gs2MatchmakingClient):
        if mode is Mode.passcode:
            return client.passcode_breakup_gathering(request)
        return client.room_breakup_gathering(request)

    run_with_client(config_path, call)
    print_success(f"Broke up gathering {gathering_id}")


@app.command("complete")
def complete(
    name: NameArgument,
    gathering_id: GatheringArgument,
    access_token: AccessTokenOption,
    mode: ModeOption = Mode.room,
    config_path: ConfigOption = None,
) -> None:
    """Complete a Room or Passcode gathering you created before it is full."""
    request = _owner_request(mode, name, gathering_id, access_token)

    def call(client: Gs2MatchmakingClient):
        if mode is Mode.passcode:
            return client.passcode_early_complete_gathering(request)
        return client.room_early_complete_gathering(request)

    run_with_client(config_path, call)
    print_success(f"Completed gathering {gathering_id}")


def _numbered_values(
    key_format: str, option: str, values: list[str] | None
) -> dict[str, int]:
    """Parse repeated N=VALUE options into request keys."""
    result: dict[str, int] = {}
    for value in values or []:
        index, _, number = value.partition("=")
        if index not in {"1", "2", "3", "4", "5"} or not number:
            print_error(f"{option} expects N=VALUE with N from 1 to 5, got '{value}'")
            raise typer.Exit(1)
        try:
            result[key_format.format(index)] = int(number)
        except ValueError:
            print_error(f"{option} value must be an integer, got '{number}'")
            raise typer.Exit(1)
    return result


def _owner_request(
    mode: Mode, name: str, gathering_id: str, access_token: str
) -> dict[str, str]:
    if mode not in (Mode.room, Mode.passcode):
        print_error(f"Only room and passcode gatherings support this ({mode.value})")
        raise typer.Exit(1)
    return {
        "matchmakingName": name,
        "gatheringId": gathering_id,
        "accessToken": access_token,
    }
