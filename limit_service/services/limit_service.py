"""
Limit service: the registry of a tenant's configured limits.
"""

import asyncio
from typing import Any, Mapping, Optional

from limit_service.core.config import LimitServiceSettings, limit_settings
from limit_service.core.errors import HostLimitError, IncorrectUsageError
from limit_service.core.logging import get_logger
from limit_service.core.naming import to_camel_case
from limit_service.dtos.limits_dto import Subscription
from limit_service.limits import AllowlistLimit, FlagLimit, Limit, MaxLimit, MaxPeriodicLimit
from limit_service.schemas.limit_config import (
    AllowlistLimitConfig,
    FlagLimitConfig,
    LimitConfig,
    MaxLimitConfig,
    MaxPeriodicLimitConfig,
    parse_limit_config,
    parse_subscription,
)

logger = get_logger(__name__)


class LimitService:
    """
    Registry of limits for one tenant.

    Create one per tenant (or per request), call load_limits() with the
    tenant's complete plan configuration, then ask it about individual limits
    by name. Names may be given in any case style.
    """

    def __init__(self, settings: LimitServiceSettings | None = None):
        """
        Initialize limit service.

        Args:
            settings: Service settings (defaults to the environment-driven settings)
        """
        self.settings = settings or limit_settings
        self.limits: dict[str, Limit] = {}

    def load_limits(
            self,
            limits: Optional[Mapping[str, Any]] = None,
            errors: Optional[Mapping[str, str]] = None,
            subscription: Any = None,
    ) -> None:
        """
        Load a complete limit configuration, replacing any previously loaded limits.

        Args:
            limits: Limit name -> config, e.g. {"staff": {"max": 2}}
            errors: Limit kind -> message template
            subscription: {"interval": "month", "startDate": "..."}; required for maxPeriodic limits

        Raises:
            IncorrectUsageError: If errors are missing or a limit is misconfigured
        """
        if errors is None:
            raise IncorrectUsageError("Config Missing: 'errors' is required.")

        parsed_subscription = parse_subscription(subscription)
        errors = {to_camel_case(kind): template for kind, template in errors.items()}

        loaded: dict[str, Limit] = {}
        for raw_name, raw_config in (limits or {}).items():
            name = to_camel_case(raw_name)
            config = parse_limit_config(name, raw_config)
            loaded[name] = self._build_limit(name, config, errors, parsed_subscription)

        self.limits = loaded

        logger.info(
            "limits_loaded",
            limits=sorted(loaded),
            has_subscription=parsed_subscription is not None
        )

    def _build_limit(
            self,
            name: str,
            config: LimitConfig,
            errors: Mapping[str, str],
            subscription: Optional[Subscription]
    ) -> Limit:
        if isinstance(config, FlagLimitConfig):
            return FlagLimit(name, config.disabled, errors, error=config.error)
        if isinstance(config, MaxLimitConfig):
            return MaxLimit(
                name,
                config.max,
                errors,
                current_count_query=config.current_count_query,
                error=config.error
            )
        if isinstance(config, MaxPeriodicLimitConfig):
            return MaxPeriodicLimit(
                name,
                config.max_periodic,
                errors,
                subscription,
                current_count_query=config.current_count_query,
                error=config.error
            )
        if isinstance(config, AllowlistLimitConfig):
            return AllowlistLimit(name, config.allowlist, errors, error=config.error)
        raise IncorrectUsageError(f"Unknown limit configuration for '{name}'", context={"name": name})

    def get_limit(self, name: str) -> Optional[Limit]:
        """Look up a limit by name in any case style."""
        return self.limits.get(to_camel_case(name))

    def is_limited(self, name: str) -> bool:
        """Whether a limit with this name is configured."""
        return self.get_limit(name) is not None

    def is_disabled(self, name: str) -> bool:
        """Whether this name is a feature flag that is switched off."""
        limit = self.get_limit(name)
        return isinstance(limit, FlagLimit) and limit.disabled

    async def check_is_over_limit(self, name: str, options: Any = None) -> Optional[bool]:
        """
        Whether the named resource is over its limit.

        Returns:
            True/False, or None if no such limit is configured
        """
        limit = self.get_limit(name)
        if limit is None:
            return None
        return await limit.error_if_is_over_limit(options) is not None

    async def check_would_go_over_limit(self, name: str, options: Any = None) -> Optional[bool]:
        """
        Whether adding one more of the named resource would exceed its limit.

        Returns:
            True/False, or None if no such limit is configured
        """
        limit = self.get_limit(name)
        if limit is None:
            return None
        return await limit.error_if_would_go_over_limit(options) is not None

    async def error_if_is_over_limit(self, name: str, options: Any = None) -> Optional[HostLimitError]:
        """
        Describe how the named resource is over its limit.

        Returns:
            HostLimitError, or None if within the limit or no such limit is configured
        """
        limit = self.get_limit(name)
        if limit is None:
            return None
        return await limit.error_if_is_over_limit(options)

    async def error_if_would_go_over_limit(self, name: str, options: Any = None) -> Optional[HostLimitError]:
        """
        Describe how adding one more of the named resource would exceed its limit.

        Returns:
            HostLimitError, or None if allowed or no such limit is configured
        """
        limit = self.get_limit(name)
        if limit is None:
            return None
        return await limit.error_if_would_go_over_limit(options)

    async def check_if_any_over_limit(self, options: Any = None) -> bool:
        """
        Whether any configured limit is currently exceeded.

        Raises:
            Whatever an individual limit's check raises (e.g. IncorrectUsageError
            for allowlist limits); the first failure aborts the whole check.
        """
        limits = list(self.limits.values())

        if self.settings.CONCURRENT_CHECKS:
            tasks = [asyncio.ensure_future(limit.error_if_is_over_limit(options)) for limit in limits]
            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                # Nothing may keep using the host's options (e.g. its
                # transaction) once the failure reaches the caller.
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        else:
            results = [await limit.error_if_is_over_limit(options) for limit in limits]

        exceeded = [limit.name for limit, result in zip(limits, results) if result is not None]
        if exceeded:
            logger.info("limits_exceeded", limits=exceeded)
        return bool(exceeded)
