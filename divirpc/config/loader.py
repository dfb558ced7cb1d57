"""Configuration loading for divirpc clients.

Settings are layered, later layers winning:

1. ClientConfig defaults
2. JSON file (explicit path, or $DIVIRPC_CONFIG when set)
3. Keyword overrides from the caller
4. RPC_USER / RPC_PASS environment variables, for credentials only and only
   when no earlier layer set them
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from divirpc.config.schema import ClientConfig
from divirpc.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DIVIRPC_CONFIG"
USER_ENV_VAR = "RPC_USER"
SECRET_ENV_VAR = "RPC_PASS"


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read the settings object from a JSON config file.

    An empty file yields no settings.

    Raises:
        ConfigError: If the file can't be read, isn't JSON, or isn't an object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold an object, got {type(data).__name__}")
    return data


def load_config(path: Path | None = None, **overrides: Any) -> ClientConfig:
    """Build a validated ClientConfig.

    Args:
        path: Explicit config file path. Missing file is an error.
        **overrides: ClientConfig fields supplied by the caller. None values
            are ignored so CLI flags that were not given don't mask the file.

    Returns:
        Validated, immutable ClientConfig.

    Raises:
        ConfigError: If the file is missing or invalid, or the merged settings
            fail validation.
    """
    merged: dict[str, Any] = {}
    source: Path | None = None

    if path is not None:
        source = path
    elif env_path := os.environ.get(CONFIG_ENV_VAR):
        if Path(env_path).is_file():
            source = Path(env_path)
        else:
            logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, env_path)

    if source is not None:
        merged.update(_read_config_file(source))
        logger.debug("Config loaded from: %s", source)

    merged.update({key: value for key, value in overrides.items() if value is not None})

    if "username" not in merged and (env_user := os.environ.get(USER_ENV_VAR)):
        merged["username"] = env_user
    if "secret" not in merged and (env_secret := os.environ.get(SECRET_ENV_VAR)):
        merged["secret"] = env_secret

    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as e:
        origin = f" (from {source})" if source is not None else ""
        raise ConfigError(f"Config validation failed{origin}: {e}") from e
