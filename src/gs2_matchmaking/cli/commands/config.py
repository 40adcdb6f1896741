"""Config subcommands for client configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError

from gs2_matchmaking.cli.utils.output import (
    console,
    print_error,
    print_success,
    print_warning,
)
from gs2_matchmaking.config import ClientConfig
from gs2_matchmaking.models import Credentials

app = typer.Typer(no_args_is_help=True)


@app.command("validate")
def validate(
    config_path: Annotated[
        Path,
        typer.Argument(
            help="Path to configuration file to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed configuration"),
    ] = False,
) -> None:
    """Validate a client configuration file.

    Examples:
        gs2-matchmaking config validate gs2.yaml
        gs2-matchmaking config validate gs2.yaml --verbose
    """
    try:
        with open(config_path) as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print_error(f"Invalid YAML syntax: {e}")
        raise typer.Exit(1)

    if raw_data is None:
        print_error("Configuration file is empty")
        raise typer.Exit(1)

    if not isinstance(raw_data, dict):
        print_error("Configuration must be a YAML mapping (dictionary)")
        raise typer.Exit(1)

    try:
        config = ClientConfig.model_validate(raw_data)
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    warnings: list[str] = []
    if not config.endpoint_url_template.startswith("https://"):
        warnings.append(
            "endpoint_url_template does not use https - "
            "credentials and access tokens will be sent in clear text"
        )
    if "{region}" not in config.endpoint_url_template:
        warnings.append(
            "endpoint_url_template has no {region} placeholder - "
            "the region setting will be ignored"
        )

    print_success(f"Configuration is valid: {config_path}")

    if warnings:
        console.print()
        for warning in warnings:
            print_warning(warning)

    if verbose:
        console.print()
        console.print(f"[bold]Region:[/bold] {config.region}")
        console.print(f"[bold]Client ID:[/bold] {config.credentials.client_id}")
        console.print(
            f"[bold]Matchmaking endpoint:[/bold] {config.endpoint_url('matchmaking')}"
        )
        console.print(f"[bold]Timeout:[/bold] {config.timeout}s")
        console.print(f"[bold]Max retries:[/bold] {config.max_retries}")


@app.command("init")
def init(
    config_path: Annotated[
        Path,
        typer.Argument(help="Where to write the configuration file", dir_okay=False),
    ],
    client_id: Annotated[
        str,
        typer.Option("--client-id", prompt=True, help="GS2 client ID"),
    ],
    client_secret: Annotated[
        str,
        typer.Option(
            "--client-secret", prompt=True, hide_input=True, help="GS2 client secret"
        ),
    ],
    region: Annotated[
        str,
        typer.Option("--region", "-r", help="GS2 region"),
    ] = "ap-northeast-1",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a new client configuration file."""
    if config_path.exists() and not force:
        print_error(f"{config_path} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    try:
        config = ClientConfig(
            region=region,
            credentials=Credentials(client_id=client_id, client_secret=client_secret),
        )
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    config.to_yaml(str(config_path))
    print_success(f"Wrote configuration to {config_path}")
