from __future__ import annotations


class ConfigError(ValueError):
    """A grid description does not carry enough sizing information."""


class FontResolutionError(RuntimeError):
    """The page backend could not materialize a font proxy."""

    def __init__(self, proxy, reason: str = "") -> None:
        self.proxy = proxy
        message = f"Cannot resolve font {proxy}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DocumentIOError(OSError):
    """The output document could not be created or written."""
