"""
Maximum limits that reset every billing period.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from limit_service.core.billing_period import current_billing_period
from limit_service.core.errors import IncorrectUsageError
from limit_service.dtos.limits_dto import BillingPeriodWindow, RecurrenceInterval, Subscription
from limit_service.limits.max import MaxLimit
from limit_service.schemas.limit_config import CountQuery


class MaxPeriodicLimit(MaxLimit):
    """
    A ceiling on usage within the current billing period, e.g. emails per month.

    The count query is called as `query(options, window)`; it is up to the
    host to count only what falls inside `window.start <= t < window.end`.
    """

    kind = "maxPeriodic"

    def __init__(
        self,
        name: str,
        max_count: int,
        errors: Mapping[str, str],
        subscription: Optional[Subscription],
        current_count_query: Optional[CountQuery] = None,
        error: Optional[str] = None,
    ):
        if subscription is None:
            raise IncorrectUsageError(
                "Attempted to setup a periodic max limit without a subscription",
                context={"name": name},
            )
        super().__init__(name, max_count, errors, current_count_query, error)
        self.subscription = subscription

    @property
    def interval(self) -> RecurrenceInterval:
        return self.subscription.interval

    @property
    def start_date(self) -> datetime:
        return self.subscription.start_date

    def current_billing_period_window(self, now: Optional[datetime] = None) -> BillingPeriodWindow:
        """
        The billing window containing `now` (default: the current time).

        Returns:
            BillingPeriodWindow with start <= now < end
        """
        return current_billing_period(self.start_date, self.interval, now)

    async def run_count_query(self, options: Any) -> Any:
        return await self.current_count_query(options, self.current_billing_period_window())
