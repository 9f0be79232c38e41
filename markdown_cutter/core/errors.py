"""Custom exceptions for Markdown Cutter."""


class MarkdownCutterError(Exception):
    """Base exception for all markdown cutter errors."""

    pass


class ConfigurationError(MarkdownCutterError):
    """Raised when a matcher or cutter is configured incorrectly."""

    pass


class LimitValidationError(MarkdownCutterError):
    """Raised when a limits mapping contains invalid values."""

    def __init__(self, message: str, limits: object = None) -> None:
        self.limits = limits
        super().__init__(message)
