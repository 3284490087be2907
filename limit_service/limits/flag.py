"""
Feature flag limits.
"""

from typing import Any, Mapping, Optional

from limit_service.core.errors import HostLimitError
from limit_service.limits.base import Limit


class FlagLimit(Limit):
    """
    A feature that is either available on the plan or not.

    is_over_limit() and would_go_over_limit() both report `disabled`, but
    only error_if_would_go_over_limit() returns an error for a disabled flag.
    error_if_is_over_limit() always returns None, so the registry's
    check_is_over_limit() and check_if_any_over_limit() never count a
    disabled flag as already exceeded.
    """

    kind = "flag"
    fallback_error = "Your plan does not support {{name}}. Please upgrade to enable {{name}}."

    def __init__(
        self,
        name: str,
        disabled: bool,
        errors: Mapping[str, str],
        error: Optional[str] = None,
    ):
        super().__init__(name, errors, error)
        self.disabled = disabled

    def generate_error(self) -> HostLimitError:
        return self.build_error({})

    async def is_over_limit(self, options: Any = None) -> bool:
        return self.disabled

    async def would_go_over_limit(self, options: Any = None) -> bool:
        return self.disabled

    async def error_if_is_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        # Turning a flag off does not retroactively put existing usage over
        # the limit; only new usage is blocked.
        return None

    async def error_if_would_go_over_limit(self, options: Any = None) -> Optional[HostLimitError]:
        if await self.would_go_over_limit(options):
            return self.generate_error()
        return None
