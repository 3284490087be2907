"""
Data Transfer Objects (DTOs) package.

DTOs are simple dataclasses used to transfer data between layers.
"""

from limit_service.dtos.limits_dto import (
    BillingPeriodWindow,
    RecurrenceInterval,
    Subscription,
)

__all__ = [
    "BillingPeriodWindow",
    "RecurrenceInterval",
    "Subscription",
]
