"""Client configuration with Pydantic validation.

The configuration can be:
- Instantiated directly: `ClientConfig(credentials=Credentials(...))`
- Loaded from YAML: `ClientConfig.from_yaml("gs2.yaml")`
- Loaded from environment variables: `ClientConfig.from_env()`
"""

import os
from collections.abc import Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gs2_matchmaking.models.base import Credentials

DEFAULT_REGION = "ap-northeast-1"
DEFAULT_ENDPOINT_URL_TEMPLATE = "https://{service}.{region}.gs2io.com"

ENV_REGION = "GS2_REGION"
ENV_CLIENT_ID = "GS2_CLIENT_ID"
ENV_CLIENT_SECRET = "GS2_CLIENT_SECRET"
ENV_ENDPOINT_URL_TEMPLATE = "GS2_ENDPOINT_URL_TEMPLATE"
ENV_TIMEOUT = "GS2_TIMEOUT"
ENV_MAX_RETRIES = "GS2_MAX_RETRIES"


def format_endpoint_url(template: str, service: str, region: str) -> str:
    """Fill an endpoint URL template, dropping any trailing slash."""
    return template.rstrip("/").format(service=service, region=region)


class ClientConfig(BaseModel):
    """Connection settings shared by every GS2 service client."""

    model_config = ConfigDict(frozen=True)

    region: str = Field(
        DEFAULT_REGION,
        min_length=1,
        description="GS2 region name",
    )
    credentials: Credentials = Field(
        description="Project client ID and secret",
    )
    endpoint_url_template: str = Field(
        DEFAULT_ENDPOINT_URL_TEMPLATE,
        description="Endpoint URL with {service} and {region} placeholders",
    )
    timeout: float = Field(
        30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    max_retries: int = Field(
        3,
        ge=1,
        description="Attempts for idempotent requests on transient failures",
    )

    @field_validator("endpoint_url_template")
    @classmethod
    def _check_placeholders(cls, value: str) -> str:
        if "{service}" not in value:
            raise ValueError("endpoint_url_template must contain '{service}'")
        return value

    def endpoint_url(self, service: str) -> str:
        """Return the base URL for a service endpoint in this region."""
        return format_endpoint_url(self.endpoint_url_template, service, self.region)

    @classmethod
    def from_yaml(cls, path: str) -> "ClientConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            A validated ClientConfig instance.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist.
            ValidationError: If the configuration is invalid.
        """
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_yaml(self, path: str) -> None:
        """Save configuration to a YAML file.

        The client secret is written in clear text; keep the file private.

        Args:
            path: Path where the YAML file will be saved.
        """
        data = self.model_dump(by_alias=False)
        data["credentials"] = {
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret.get_secret_value(),
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build configuration from GS2_* environment variables.

        Raises:
            ValueError: If GS2_CLIENT_ID or GS2_CLIENT_SECRET is not set.
        """
        env = os.environ if environ is None else environ

        client_id = env.get(ENV_CLIENT_ID)
        client_secret = env.get(ENV_CLIENT_SECRET)
        if not client_id or not client_secret:
            raise ValueError(
                f"{ENV_CLIENT_ID} and {ENV_CLIENT_SECRET} must be set "
                "(or pass a configuration file)"
            )

        data: dict[str, object] = {
            "credentials": {"client_id": client_id, "client_secret": client_secret},
        }
        if ENV_REGION in env:
            data["region"] = env[ENV_REGION]
        if ENV_ENDPOINT_URL_TEMPLATE in env:
            data["endpoint_url_template"] = env[ENV_ENDPOINT_URL_TEMPLATE]
        if ENV_TIMEOUT in env:
            data["timeout"] = env[ENV_TIMEOUT]
        if ENV_MAX_RETRIES in env:
            data["max_retries"] = env[ENV_MAX_RETRIES]
        return cls.model_validate(data)

    @classmethod
    def load(cls, path: str | None = None) -> "ClientConfig":
        """Load from `path` when given, otherwise from the environment."""
        if path is not None:
            return cls.from_yaml(path)
        return cls.from_env()
