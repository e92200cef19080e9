"""Configuration model for a single track query."""

import re
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_TIME_LIMIT = 30.0

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: Union[str, int, float]) -> float:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) and Go-style durations such as ``30s``,
    ``1m30s``, ``500ms`` or ``1.5h``.

    Raises:
        ValueError: If the text is not a valid duration.
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)

    value = str(text).strip()
    if not value:
        raise ValueError("empty duration")

    try:
        return float(value)
    except ValueError:
        pass

    sign = 1.0
    if value[0] in "+-":
        sign = -1.0 if value[0] == "-" else 1.0
        value = value[1:]

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(value):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(value):
        raise ValueError(f"invalid duration {text!r}")
    return sign * total


class QueryConfig(BaseModel):
    """
    Settings for one invocation.

    Example:
    ```yaml
    credentials: "@file:service-account.json"
    package_name: "com.example.app"
    output_style: "production"
    jmespath_expr: "code"
    time_limit: "45s"
    ```
    """

    credentials: str = Field(
        description="Service account JSON, '@env:NAME' or '@file:PATH'",
    )
    package_name: str = Field(description="Application package name, e.g. com.example.app")
    output_style: str = Field(
        default="",
        description="highest, production, beta, alpha, internal or response",
    )
    jmespath_expr: str = Field(default="", description="JMESPath applied to the output")
    time_limit: float = Field(
        default=DEFAULT_TIME_LIMIT, description="Time limit for the API calls, in seconds"
    )

    @field_validator("package_name")
    @classmethod
    def check_package_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Package name must be specified (--package-name or PACKAGE_NAME)")
        return value.strip()

    @field_validator("credentials")
    @classmethod
    def check_credentials(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Credentials must be specified (--credentials or CREDENTIALS)")
        return value

    @field_validator("time_limit", mode="before")
    @classmethod
    def parse_time_limit(cls, value: Any) -> float:
        if value is None or value == "":
            return DEFAULT_TIME_LIMIT
        seconds = parse_duration(value)
        if seconds <= 0:
            raise ValueError("time limit must be positive")
        return seconds
