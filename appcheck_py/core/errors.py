"""Error taxonomy for catalog loading and run-level configuration failures."""

from __future__ import annotations


class AppCheckError(RuntimeError):
    """Base class for every error raised by the analysis core."""


class CatalogError(AppCheckError):
    """Represent a failure isolated to one language's catalog."""

    def __init__(self, message: str, *, language: str) -> None:
        """Initialize error with the language it is attributable to."""
        super().__init__(message)
        self.language = language


class SourceUnavailableError(CatalogError):
    """Catalog file or endpoint cannot be found or reached."""


class MalformedCatalogError(CatalogError):
    """Catalog content is not valid structured data of the expected shape."""


class ConfigurationInvalidError(AppCheckError):
    """Configuration cannot drive a run; raised before any processing."""


class IgnoreRuleCompileError(AppCheckError):
    """An ignore pattern cannot be compiled as a regular expression."""

    def __init__(self, message: str, *, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern
