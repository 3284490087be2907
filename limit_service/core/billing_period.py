"""
Billing period arithmetic for periodic limits.

Periods are whole calendar months counted from the subscription start date.
A start date late in a month is clamped to the end of shorter months
(Jan 31 -> Feb 28 -> Mar 31), always measured from the original anchor so
the clamping never accumulates.
"""

import calendar
from datetime import datetime, timezone

from limit_service.core.errors import IncorrectUsageError
from limit_service.dtos.limits_dto import BillingPeriodWindow, RecurrenceInterval

_MONTHS_PER_INTERVAL = {
    RecurrenceInterval.MONTH: 1,
    RecurrenceInterval.YEAR: 12,
}


def parse_interval(interval) -> RecurrenceInterval:
    """
    Validate a recurrence interval.

    Raises:
        IncorrectUsageError: If the interval is not supported
    """
    try:
        return RecurrenceInterval(interval)
    except ValueError:
        supported = ", ".join(f'"{item.value}"' for item in RecurrenceInterval)
        raise IncorrectUsageError(
            f"Invalid interval specified. Only {supported} values are accepted.",
            context={"interval": interval},
        )


def ensure_utc(moment: datetime | str) -> datetime:
    """
    Normalise a timestamp to an aware UTC datetime.

    ISO-8601 strings are accepted, including a trailing "Z". Naive datetimes
    are assumed to already be UTC.
    """
    if isinstance(moment, str):
        text = moment.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            raise IncorrectUsageError(
                f"Invalid subscription start date: {moment!r}",
                context={"start_date": moment},
            )

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def add_months(anchor: datetime, months: int) -> datetime:
    """Shift a datetime by whole calendar months, clamping the day to the month end."""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return anchor.replace(year=year, month=month, day=day)


def add_interval(anchor: datetime, interval: RecurrenceInterval, periods: int) -> datetime:
    """Shift a datetime by a number of billing intervals (may be negative)."""
    return add_months(anchor, periods * _MONTHS_PER_INTERVAL[interval])


def current_billing_period(
        start_date: datetime,
        interval: RecurrenceInterval,
        now: datetime | None = None
) -> BillingPeriodWindow:
    """
    Find the billing window containing a moment.

    Args:
        start_date: Subscription anchor
        interval: Billing cycle length
        now: Moment to locate (defaults to the current time)

    Returns:
        BillingPeriodWindow with start <= now < end
    """
    start_date = ensure_utc(start_date)
    now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)

    months_per_period = _MONTHS_PER_INTERVAL[interval]
    months_between = (now.year - start_date.year) * 12 + (now.month - start_date.month)
    periods = months_between // months_per_period

    # The month difference can overshoot by one period when now falls before
    # the anchor's day-of-month (or time of day) within its month.
    if add_interval(start_date, interval, periods) > now:
        periods -= 1

    return BillingPeriodWindow(
        start=add_interval(start_date, interval, periods),
        end=add_interval(start_date, interval, periods + 1),
    )
