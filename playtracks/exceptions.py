"""Custom exceptions for playtracks."""

from typing import List, Optional, Sequence


class PlayTracksException(Exception):
    """Base exception for all playtracks errors."""

    pass


class ConfigError(PlayTracksException):
    """Configuration is missing or invalid. Raised before any network activity."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = ["Configuration error"]
        if self.field:
            parts.append(f"\n  Setting: {self.field}")
        parts.append(f"\n  Error: {self.message}")
        return "".join(parts)


class UnknownOutputStyle(ConfigError):
    """Requested output style is not one of the known views."""

    def __init__(self, style: str, allowed: Sequence[str]):
        self.style = style
        self.allowed = list(allowed)
        super().__init__(
            f"unknown output style {style!r}; must be one of {', '.join(self.allowed)}",
            field="output-style",
        )


class CollaboratorError(PlayTracksException):
    """The Google Play Developer API call failed (auth, not found, transport, timeout)."""

    def __init__(
        self,
        package_name: str,
        reason: str,
        suggestions: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.package_name = package_name
        self.reason = reason
        self.suggestions = suggestions or []
        self.original_error = original_error
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format API error with suggestions."""
        parts = [
            f"✗ Failed to list tracks for: {self.package_name}",
            f"\n  Reason: {self.reason}",
        ]

        if self.original_error is not None:
            parts.append(f"\n  Type: {type(self.original_error).__name__}")

        if self.suggestions:
            parts.append("\n\n  Suggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                parts.append(f"\n    {i}. {suggestion}")

        return "".join(parts)


class ProjectionError(PlayTracksException):
    """JMESPath expression could not be evaluated against the output value."""

    def __init__(self, expr: str, original_error: Optional[Exception] = None):
        self.expr = expr
        self.original_error = original_error
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"cannot evaluate expression {expr!r}{detail}")


class SerializationError(PlayTracksException):
    """Writing the result document failed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"{message}{detail}")
