"""
Allowlist limits.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from limit_service.core.errors import HostLimitError, IncorrectUsageError
from limit_service.core.logging import get_logger
from limit_service.limits.base import Limit

logger = get_logger(__name__)


class AllowlistLimit(Limit):
    """
    Restricts a resource to a set of allowed values, e.g. which themes may be installed.

    There is no count to be over; a check needs the value being tried,
    passed as options["value"]. Checks without one (including the registry's
    check_if_any_over_limit) are rejected.
    """

    kind = "allowlist"

    def __init__(
        self,
        name: str,
        allowlist: Iterable[str],
        errors: Mapping[str, str],
        error: Optional[str] = None,
    ):
        super().__init__(name, errors, error)
        self.allowlist = frozenset(allowlist)

    def requested_value(self, options: Any) -> str:
        value = options.get("value") if isinstance(options, Mapping) else None
        if value is None:
            logger.warning("allowlist_check_without_value", name=self.name)
            raise IncorrectUsageError(
                "Attempted to check an allowlist limit without a value",
                context={"name": self.name},
            )
        return value

    def generate_error(self, value: str) -> HostLimitError:
        return self.build_error({"value": value}, value=value)

    async def is_over_limit(self, options: Any = None) -> bool:
        return self.requested_value(options) not in self.allowlist

    async def would_go_over_limit(self, options: Any = None) -> bool:
        return await self.is_over_limit(options)

    async def error_if_is_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        value = self.requested_value(options)
        if value not in self.allowlist:
            return self.generate_error(value)
        return None

    async def error_if_would_go_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        return await self.error_if_is_over_limit(options)
