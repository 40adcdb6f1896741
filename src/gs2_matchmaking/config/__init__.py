"""Configuration module for GS2 client connection settings.

This module provides a Pydantic-based configuration class with support for
YAML file and environment variable loading.
"""

from gs2_matchmaking.config.client_config import (
    DEFAULT_ENDPOINT_URL_TEMPLATE,
    DEFAULT_REGION,
    ClientConfig,
    format_endpoint_url,
)

__all__ = [
    "ClientConfig",
    "DEFAULT_ENDPOINT_URL_TEMPLATE",
    "DEFAULT_REGION",
    "format_endpoint_url",
]
