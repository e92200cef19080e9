"""Service account credential resolution.

The credentials setting is one of:

- ``@env:NAME``: the JSON key is read from environment variable ``NAME``
- ``@file:PATH``: path to a service account JSON key file
- anything else: the JSON key itself
"""

import json
import os
from typing import Any, Dict

from playtracks.exceptions import ConfigError
from playtracks.utils.logging import get_logger

ENV_PREFIX = "@env:"
FILE_PREFIX = "@file:"


def read_credentials(value: str) -> str:
    """Return the raw credential JSON text referenced by ``value``."""
    if value.startswith(ENV_PREFIX):
        var_name = value[len(ENV_PREFIX) :]
        text = os.environ.get(var_name, "")
        if not text:
            raise ConfigError(
                f"environment variable {var_name!r} is not set or empty", field="credentials"
            )
        return text

    if value.startswith(FILE_PREFIX):
        path = value[len(FILE_PREFIX) :]
        if not os.path.exists(path):
            raise ConfigError(f"credentials file not found: {path}", field="credentials")
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    return value


def resolve_credentials(value: str) -> Dict[str, Any]:
    """Resolve the credentials setting into service account info.

    Raises:
        ConfigError: If the source is missing or does not hold a JSON object.
    """
    if not value:
        raise ConfigError("Credentials must be specified", field="credentials")

    text = read_credentials(value)
    get_logger().register_secret(text)

    try:
        info = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"credentials are not valid JSON (line {e.lineno}, column {e.colno})",
            field="credentials",
        ) from None

    if not isinstance(info, dict):
        raise ConfigError("credentials JSON must be an object", field="credentials")

    private_key = info.get("private_key")
    if isinstance(private_key, str):
        get_logger().register_secret(private_key)

    return info
