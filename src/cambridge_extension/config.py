"""Configuration loading from the environment."""

import os
from pathlib import Path
from typing import Mapping, Optional

from cambridge_extension.constants import BINARY_NAME, LANGUAGE_SERVER_ID
from cambridge_extension.types import ExtensionConfig, ResolveStrategy

ENV_STRATEGY = "CAMBRIDGE_LSP_STRATEGY"
ENV_BINARY_DIR = "CAMBRIDGE_LSP_DIR"
ENV_BINARY_NAME = "CAMBRIDGE_LSP_BINARY"
ENV_SERVER_ID = "CAMBRIDGE_LSP_SERVER_ID"
ENV_LOG_LEVEL = "CAMBRIDGE_LSP_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_strategy(value: str) -> ResolveStrategy:
    """Parse a strategy name such as 'download' or 'search-path'."""
    normalized = value.strip().lower().replace("_", "-")
    for strategy in ResolveStrategy:
        if strategy.value == normalized:
            return strategy
    valid = ", ".join(s.value for s in ResolveStrategy)
    raise ValueError(f"Invalid resolve strategy: {value}. Must be one of: {valid}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> ExtensionConfig:
    """Build an ExtensionConfig, overriding defaults from environment variables.

    Args:
        environ: Mapping to read from, os.environ when omitted

    Raises:
        ValueError: If the strategy or log level is not recognised
    """
    env = os.environ if environ is None else environ

    log_level = env.get(ENV_LOG_LEVEL, "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {log_level}. Must be one of: {', '.join(LOG_LEVELS)}"
        )

    return ExtensionConfig(
        binary_name=env.get(ENV_BINARY_NAME) or BINARY_NAME,
        binary_dir=Path(env.get(ENV_BINARY_DIR) or "."),
        strategy=parse_strategy(env.get(ENV_STRATEGY, ResolveStrategy.DOWNLOAD.value)),
        language_server_id=env.get(ENV_SERVER_ID) or LANGUAGE_SERVER_ID,
        log_level=log_level,
    )
