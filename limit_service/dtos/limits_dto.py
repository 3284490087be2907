"""
Limit Data Transfer Objects (DTOs).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RecurrenceInterval(str, Enum):
    """Billing cycle lengths."""
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Subscription:
    """DTO for the subscription a periodic limit is anchored to."""
    interval: RecurrenceInterval
    start_date: datetime         # timezone-aware, UTC


@dataclass(frozen=True)
class BillingPeriodWindow:
    """Half-open billing window [start, end)."""
    start: datetime
    end: datetime

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment < self.end
