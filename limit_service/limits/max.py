"""
Absolute maximum limits.
"""

from typing import Any, Mapping, Optional

from limit_service.core.errors import HostLimitError, IncorrectUsageError
from limit_service.core.logging import get_logger
from limit_service.limits.base import Limit
from limit_service.schemas.limit_config import CountQuery

logger = get_logger(__name__)


def missing_count_query(name: str) -> CountQuery:
    """Count query for limits configured without one; fails when called."""

    async def query(*args: Any, **kwargs: Any) -> int:
        raise IncorrectUsageError(
            f"No current count query configured for limit '{name}'",
            context={"name": name},
        )

    return query


class MaxLimit(Limit):
    """
    A ceiling on how many of a resource may exist.

    Over the limit means count > max; one more would go over when
    count + 1 > max. A count equal to max is at the limit, not over it.
    """

    kind = "max"

    def __init__(
        self,
        name: str,
        max_count: int,
        errors: Mapping[str, str],
        current_count_query: Optional[CountQuery] = None,
        error: Optional[str] = None,
    ):
        super().__init__(name, errors, error)
        self.max_count = max_count
        self.current_count_query = current_count_query or missing_count_query(name)

    async def run_count_query(self, options: Any) -> Any:
        return await self.current_count_query(options)

    async def current_query(self, options: Any = None) -> int:
        """
        Fetch the current count from the host.

        Raises:
            IncorrectUsageError: If the query returns something other than an integer
        """
        count = await self.run_count_query(options)
        if isinstance(count, bool) or not isinstance(count, int):
            raise IncorrectUsageError(
                f"Current count query for limit '{self.name}' returned {count!r}, expected an integer",
                context={"name": self.name},
            )
        logger.debug("limit_checked", name=self.name, kind=self.kind, count=count, limit=self.max_count)
        return count

    def generate_error(self, total: int) -> HostLimitError:
        """
        Describe a violation for a given count.

        Args:
            total: The count to report

        Returns:
            HostLimitError with details {name, limit, total}
        """
        return self.build_error(
            {"limit": self.max_count, "total": total},
            max=self.max_count,
            count=total,
            total=total,
        )

    async def is_over_limit(self, options: Any = None) -> bool:
        return await self.current_query(options) > self.max_count

    async def would_go_over_limit(self, options: Any = None) -> bool:
        return await self.current_query(options) + 1 > self.max_count

    async def error_if_is_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        count = await self.current_query(options)
        if count > self.max_count:
            return self.generate_error(count)
        return None

    async def error_if_would_go_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        count = await self.current_query(options)
        if count + 1 > self.max_count:
            return self.generate_error(count)
        return None
