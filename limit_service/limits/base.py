"""
Base interface for limits.

Every limit variant answers the same four questions for the registry:
is the resource over its limit, would one more unit take it over, and the
error-producing versions of both.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from limit_service.core.errors import HostLimitError
from limit_service.core.formatting import format_template
from limit_service.core.logging import get_logger
from limit_service.core.naming import humanize

logger = get_logger(__name__)

DEFAULT_ERROR = "This action would exceed the {{name}} limit on your current plan."


class Limit(ABC):
    """
    Abstract base class for limits.

    Attributes:
        name: Limit name, interpolated into messages as {{name}}
        error: Per-limit message template, takes precedence over `errors`
        errors: Message templates keyed by limit kind
    """

    kind: str = ""
    fallback_error: str = DEFAULT_ERROR

    def __init__(
        self,
        name: str,
        errors: Mapping[str, str],
        error: Optional[str] = None,
    ):
        self.name = name
        self.errors = errors
        self.error = error

    def render(self, **variables: Any) -> str:
        """
        Render this limit's message.

        The template is the limit's own `error`, else `errors[kind]`, else the
        built-in fallback. Fallbacks get the humanised name ("custom themes").
        """
        template = self.error or self.errors.get(self.kind)
        name = self.name
        if not template:
            template, name = self.fallback_error, humanize(self.name)
        return format_template(template, {"name": name, **variables})

    def build_error(self, error_details: dict[str, Any], **variables: Any) -> HostLimitError:
        """Build a limit error from its details and the template variables."""
        error_details = {"name": self.name, **error_details}
        logger.warning("limit_exceeded", kind=self.kind, **error_details)
        return HostLimitError(message=self.render(**variables), error_details=error_details)

    @abstractmethod
    async def is_over_limit(self, options: Any = None) -> bool:
        """Whether the resource is already beyond its limit."""
        ...

    @abstractmethod
    async def would_go_over_limit(self, options: Any = None) -> bool:
        """Whether adding one more unit would take the resource beyond its limit."""
        ...

    @abstractmethod
    async def error_if_is_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        """
        Check the limit and describe the violation, if any.

        Args:
            options: Host options, forwarded unchanged to the count query

        Returns:
            HostLimitError when over the limit, otherwise None
        """
        ...

    @abstractmethod
    async def error_if_would_go_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        """Like error_if_is_over_limit, for adding one more unit."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
