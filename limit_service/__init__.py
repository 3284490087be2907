"""
Usage limit evaluation for multi-tenant hosts.

Load a tenant's plan limits into a LimitService, then ask whether a
resource is over (or would go over) its limit and get a user-facing
error describing it.
"""

from limit_service.core.errors import HostLimitError, IncorrectUsageError, LimitServiceError
from limit_service.dtos.limits_dto import BillingPeriodWindow, RecurrenceInterval, Subscription
from limit_service.limits import AllowlistLimit, FlagLimit, Limit, MaxLimit, MaxPeriodicLimit
from limit_service.services.limit_service import LimitService

__all__ = [
    "LimitService",
    "Limit",
    "FlagLimit",
    "MaxLimit",
    "MaxPeriodicLimit",
    "AllowlistLimit",
    "Subscription",
    "BillingPeriodWindow",
    "RecurrenceInterval",
    "HostLimitError",
    "IncorrectUsageError",
    "LimitServiceError",
]
