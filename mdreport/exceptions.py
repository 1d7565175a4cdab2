"""Custom exceptions for mdreport."""

from typing import Optional


class ReportError(Exception):
    """Base exception for mdreport errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(ReportError):
    """Exception raised while reading or parsing Markdown input."""

    pass


class RenderingError(ReportError):
    """Exception raised while drawing or writing the PDF."""

    pass


class FontError(ReportError):
    """Exception raised when a configured font cannot be registered."""

    pass


class MediaError(ReportError):
    """Exception raised when the logo or another image cannot be loaded."""

    pass


class ConfigError(ReportError):
    """Exception raised for invalid configuration values."""

    pass
