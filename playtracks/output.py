"""Projection through JMESPath and JSON serialization of the result."""

import json
from typing import Any, TextIO

import jmespath
from jmespath.exceptions import JMESPathError

from playtracks.exceptions import ProjectionError, SerializationError
from playtracks.utils.logging import get_logger


def to_json_value(value: Any) -> Any:
    """Return the JSON-shaped form of a model, or ``value`` itself if already plain."""
    converter = getattr(value, "to_json_value", None)
    if callable(converter):
        return converter()
    return value


def search(value: Any, expr: str) -> Any:
    """Evaluate ``expr`` against the JSON form of ``value``.

    Raises:
        ProjectionError: If the expression does not compile or cannot be applied.
    """
    try:
        return jmespath.search(expr, to_json_value(value))
    except JMESPathError as e:
        raise ProjectionError(expr, e) from e


def project(value: Any, expr: str) -> Any:
    """Re-project ``value`` through a JMESPath expression.

    An empty expression returns ``value`` unchanged. A bad expression never
    aborts the run: the failure is logged as a warning and the unprojected
    value is returned.

    In a ``TrackListing`` the ``versionCodes`` are JSON strings, so ``max`` and
    ``sort`` order them as text ("9" > "10"). Convert first:
    ``max(tracks[].releases[].versionCodes[].to_number(@))``.
    """
    if not expr:
        return value

    try:
        return search(value, expr)
    except ProjectionError as e:
        get_logger().warning(
            f"JMESPath expression ignored: {e.original_error}", expr=repr(expr)
        )
        return value


def dumps(value: Any) -> str:
    return json.dumps(to_json_value(value), indent=2, ensure_ascii=False) + "\n"


def emit(value: Any, writer: TextIO) -> None:
    """Write ``value`` to ``writer`` as one indented JSON document.

    Raises:
        SerializationError: If the value cannot be encoded or the write fails.
    """
    try:
        text = dumps(value)
    except (TypeError, ValueError) as e:
        raise SerializationError("cannot encode result as JSON", e) from e

    try:
        writer.write(text)
        writer.flush()
    except (OSError, ValueError) as e:
        raise SerializationError("cannot write result", e) from e
