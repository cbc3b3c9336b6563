"""
Domain-specific exception hierarchy for the banktime package.
"""


class BankTimeError(Exception):
    """Base class for all package-level errors."""


class ParseError(BankTimeError, ValueError):
    """Raised when text cannot be decoded into a BusinessTime."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        message = f"unable to parse {text!r} as an RFC 3339 timestamp"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(BankTimeError):
    """Raised when the configuration file cannot be read or validated."""
