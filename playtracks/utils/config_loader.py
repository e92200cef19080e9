import os
import re
from typing import Any, Dict

import yaml

from playtracks.utils.logging import get_logger

# Pattern to match ${VAR} or ${env:VAR}
# Captures the variable name in group 1
ENV_PATTERN = re.compile(r"\$\{(?:env:)?([A-Za-z0-9_]+)\}")

CONFIG_KEYS = ("credentials", "package_name", "output_style", "jmespath_expr", "time_limit")


def load_yaml_with_env(path: str) -> Dict[str, Any]:
    """Load a YAML settings file with environment variable substitution.

    Keys use either underscores or dashes (``package_name`` / ``package-name``).
    Unknown keys are ignored with a warning.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary restricted to known settings

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If environment variable is missing or the file is not a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    logger = get_logger()
    logger.debug("Loading YAML configuration", path=path)

    if not os.path.exists(path):
        logger.error("Configuration file not found", path=path)
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    def replace_env(match):
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            logger.error("Missing required environment variable", variable=var_name, file=path)
            raise ValueError(f"Missing environment variable: {var_name}")
        logger.debug("Environment variable substituted", variable=var_name, length=len(value))
        return value

    substituted_content = ENV_PATTERN.sub(replace_env, content)

    try:
        data = yaml.safe_load(substituted_content) or {}
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", path=path, error=str(e))
        raise

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    settings = {}
    for key, value in data.items():
        normalized = str(key).replace("-", "_")
        if normalized not in CONFIG_KEYS:
            logger.warning("Ignoring unknown configuration key", key=key, file=path)
            continue
        settings[normalized] = "" if value is None else value

    logger.debug("Configuration loading complete", path=path, keys=list(settings.keys()))
    return settings
