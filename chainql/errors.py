"""Custom exception hierarchy for chainql.

All public errors inherit from ChainQLError so callers can catch the base
class for any chainql-specific failure.

The query builder itself never raises for SQL content: every filter value
shape has a defined rendering, unclosed groups are closed at build time and
an empty batch yields an inert query.  The errors below cover configuration
and optional-dependency failures only.
"""
from __future__ import annotations


class ChainQLError(Exception):
    """Base exception for all chainql errors."""


class ProfileConfigError(ChainQLError):
    """Raised when a RenderProfile is misconfigured.

    Detected when the profile is created, before any statement is built.

    Args:
        message: Human-readable description.
        field: Name of the offending profile field.
        reason: Why the value is rejected.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.reason = reason or ""


class MissingDependencyError(ChainQLError, ImportError):
    """Raised when an optional third-party dependency is not installed.

    Args:
        message: Human-readable description, including the install hint.
        package: Distribution name of the missing dependency.
    """

    def __init__(self, message: str, package: str) -> None:
        super().__init__(message)
        self.package = package
