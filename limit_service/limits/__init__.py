"""Limit variants."""

from limit_service.limits.base import Limit
from limit_service.limits.flag import FlagLimit
from limit_service.limits.max import MaxLimit
from limit_service.limits.max_periodic import MaxPeriodicLimit
from limit_service.limits.allowlist import AllowlistLimit

__all__ = [
    "Limit",
    "FlagLimit",
    "MaxLimit",
    "MaxPeriodicLimit",
    "AllowlistLimit",
]
