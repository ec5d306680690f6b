"""Codegen-specific exceptions."""

from __future__ import annotations


class ShellWgetError(Exception):
    """Base exception for all shell-wget codegen failures."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ShellWgetUsageError(ShellWgetError, TypeError):
    """Raised when the generator is called without a usable completion callback."""


class ShellWgetValidationError(ShellWgetError, ValueError):
    """Raised when a request description or options mapping is invalid."""
