"""
Limit service exceptions.

IncorrectUsageError is raised when the engine is misused (bad configuration,
missing templates, unsupported checks). HostLimitError describes a quota
violation; the engine returns it rather than raising it so the caller can
decide what to do.
"""

from typing import Any


class LimitServiceError(Exception):
    """Base class for limit service errors."""

    error_type = "LimitServiceError"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class IncorrectUsageError(LimitServiceError):
    """Exception raised when the limit service is configured or called incorrectly."""

    error_type = "IncorrectUsageError"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """
        Initialize usage error.

        Args:
            message: Error message
            context: Optional machine-readable details about the misuse
        """
        self.context = context or {}
        super().__init__(message)


class HostLimitError(LimitServiceError):
    """A limit that has been, or would be, exceeded."""

    error_type = "HostLimitError"

    def __init__(self, message: str, error_details: dict[str, Any]):
        """
        Initialize limit error.

        Args:
            message: Rendered, user-facing message
            error_details: Machine-readable details (name, limit, total)
        """
        self.error_details = error_details
        super().__init__(message)
