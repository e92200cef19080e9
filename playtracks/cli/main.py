"""Main CLI entry point."""

import argparse
import os
import sys

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from playtracks.config import DEFAULT_TIME_LIMIT, QueryConfig, parse_duration
from playtracks.exceptions import ConfigError, PlayTracksException
from playtracks.output import emit
from playtracks.pipeline import run_query
from playtracks.utils.config_loader import load_yaml_with_env
from playtracks.utils.logging import configure_logging
from playtracks.version import version_info
from playtracks.views import allowed_styles

# setting -> environment variable supplying its default
ENV_DEFAULTS = {
    "credentials": "CREDENTIALS",
    "package_name": "PACKAGE_NAME",
    "output_style": "OUTPUT_STYLE",
    "jmespath_expr": "JMESPATH_EXPR",
    "time_limit": "TIME_LIMIT",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playtracks",
        description="Print the highest version code live on Google Play tracks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  playtracks --package-name com.example.app --credentials @file:key.json
  playtracks --output-style production --jmespath-expr code
  playtracks --output-style response --jmespath-expr 'tracks[].track'

Credentials:
  @env:NAME    read the service account JSON from environment variable NAME
  @file:PATH   read the service account JSON from a file
  otherwise    the service account JSON itself

Every option also reads a default from the environment:
  CREDENTIALS, PACKAGE_NAME, OUTPUT_STYLE, JMESPATH_EXPR, TIME_LIMIT

The response style keeps versionCodes as JSON strings, as the API sends them,
so compare them numerically with to_number():
  playtracks --output-style response \\
    --jmespath-expr "max(tracks[].releases[].versionCodes[].to_number(@))"
        """,
    )
    parser.add_argument(
        "--credentials", default=None, help="Service account key: JSON, @env:NAME or @file:PATH"
    )
    parser.add_argument("--package-name", default=None, help="Application package name")
    parser.add_argument(
        "--output-style",
        default=None,
        help=f"One of {', '.join(allowed_styles())} (default: highest)",
    )
    parser.add_argument(
        "--jmespath-expr", default=None, help="JMESPath expression applied to the output"
    )
    parser.add_argument(
        "--time-limit",
        default=None,
        help=f"Time limit for the API calls, e.g. 30s, 1m30s (default: {DEFAULT_TIME_LIMIT:g}s)",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML settings file")
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Diagnostics format on stderr (default: text)",
    )
    parser.add_argument("--version", action="store_true", help="Print version information")
    return parser


def _load_env_file(path):
    dotenv_path = path or find_dotenv(usecwd=True)
    if path and not os.path.exists(path):
        raise ConfigError(f".env file not found: {path}", field="env-file")
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


def _env_time_limit(logger):
    value = os.environ.get(ENV_DEFAULTS["time_limit"])
    if not value:
        return None
    try:
        parse_duration(value)
    except ValueError:
        logger.warning("Ignoring invalid TIME_LIMIT", value=value)
        return None
    return value


def load_config(args, logger) -> QueryConfig:
    """Merge settings: CLI flag > environment variable > config file > default.

    Raises:
        ConfigError: If the merged settings are missing or invalid.
    """
    settings = {}
    if args.config:
        try:
            settings.update(load_yaml_with_env(args.config))
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(str(e), field="config") from e

    for key, env_name in ENV_DEFAULTS.items():
        if key == "time_limit":
            env_value = _env_time_limit(logger)
        else:
            env_value = os.environ.get(env_name)
        if env_value:
            settings[key] = env_value

    for key in ENV_DEFAULTS:
        flag_value = getattr(args, key)
        if flag_value is not None:
            settings[key] = flag_value

    settings.setdefault("package_name", "")
    settings.setdefault("credentials", "")

    try:
        return QueryConfig(**settings)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = str(first.get("msg", e)).removeprefix("Value error, ")
        raise ConfigError(message, field=field) from None


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(structured=args.log_format == "json", level=args.log_level)

    if args.version:
        emit(version_info(), sys.stdout)
        return 0

    try:
        _load_env_file(args.env_file)
        config = load_config(args, logger)
        logger.register_secret(config.credentials)
        run_query(config, writer=sys.stdout)
    except PlayTracksException as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
