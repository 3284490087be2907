"""
Pydantic schemas for raw limit configuration.

Hosts pass plain dicts (usually straight from their plan configuration);
these models validate them and accept both the camelCase wire keys and
snake_case keys.
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from limit_service.core.billing_period import ensure_utc, parse_interval
from limit_service.core.errors import IncorrectUsageError
from limit_service.core.naming import to_camel_case
from limit_service.dtos.limits_dto import RecurrenceInterval, Subscription

CountQuery = Callable[..., Awaitable[Any]]


class _LimitConfig(BaseModel):
    """Fields shared by every limit shape."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error: Optional[str] = Field(None, description="Template overriding the 'errors' entry for this limit")


class FlagLimitConfig(_LimitConfig):
    """Feature flag: {disabled: bool}."""

    disabled: bool


class MaxLimitConfig(_LimitConfig):
    """Absolute maximum: {max: int, currentCountQuery?: fn}."""

    max: int = Field(..., ge=0)
    current_count_query: Optional[CountQuery] = Field(None, alias="currentCountQuery")


class MaxPeriodicLimitConfig(_LimitConfig):
    """Maximum per billing period: {maxPeriodic: int, currentCountQuery?: fn}."""

    max_periodic: int = Field(..., ge=0, alias="maxPeriodic")
    current_count_query: Optional[CountQuery] = Field(None, alias="currentCountQuery")


class AllowlistLimitConfig(_LimitConfig):
    """Allowed values: {allowlist: [str]}."""

    allowlist: list[str]


class SubscriptionConfig(BaseModel):
    """Subscription anchor for periodic limits."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    interval: str
    start_date: Union[datetime, str] = Field(..., alias="startDate")

    @field_validator("interval")
    @classmethod
    def check_interval(cls, value: str) -> str:
        return parse_interval(value).value

    def to_dto(self) -> Subscription:
        return Subscription(
            interval=RecurrenceInterval(self.interval),
            start_date=ensure_utc(self.start_date),
        )


LimitConfig = Union[FlagLimitConfig, MaxLimitConfig, MaxPeriodicLimitConfig, AllowlistLimitConfig]

# Discriminating key (camelCase) -> schema
LIMIT_SHAPES: dict[str, type[_LimitConfig]] = {
    "disabled": FlagLimitConfig,
    "max": MaxLimitConfig,
    "maxPeriodic": MaxPeriodicLimitConfig,
    "allowlist": AllowlistLimitConfig,
}


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'config'}: {item['msg']}"
        for item in error.errors()
    )


def parse_limit_config(name: str, raw: Any) -> LimitConfig:
    """
    Validate one limit's configuration and pick its shape.

    Args:
        name: Limit name (for error messages)
        raw: Configuration mapping or an already-parsed config model

    Returns:
        The matching config model

    Raises:
        IncorrectUsageError: If the configuration matches no shape, several
            shapes, or fails validation
    """
    if isinstance(raw, _LimitConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise IncorrectUsageError(
            f"Limit '{name}' must be configured with a mapping, got {type(raw).__name__}",
            context={"name": name},
        )

    keys = {to_camel_case(str(key)) for key in raw}
    shapes = [shape for shape in LIMIT_SHAPES if shape in keys]
    if len(shapes) != 1:
        expected = ", ".join(LIMIT_SHAPES)
        raise IncorrectUsageError(
            f"Limit '{name}' must define exactly one of: {expected}",
            context={"name": name, "found": shapes},
        )

    data = {to_camel_case(str(key)): value for key, value in raw.items()}
    try:
        return LIMIT_SHAPES[shapes[0]].model_validate(data)
    except ValidationError as e:
        raise IncorrectUsageError(
            f"Invalid configuration for limit '{name}': {_describe(e)}",
            context={"name": name},
        )


def parse_subscription(raw: Any) -> Subscription | None:
    """
    Validate the subscription passed to load_limits.

    Raises:
        IncorrectUsageError: If the subscription is malformed
    """
    if raw is None or isinstance(raw, Subscription):
        return raw
    if isinstance(raw, SubscriptionConfig):
        return raw.to_dto()
    try:
        return SubscriptionConfig.model_validate(raw).to_dto()
    except ValidationError as e:
        raise IncorrectUsageError(f"Invalid subscription: {_describe(e)}")
