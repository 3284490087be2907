"""
Tests for limit variants and error messages.
"""

import pytest
from datetime import datetime, timezone

from limit_service.core.errors import HostLimitError, IncorrectUsageError
from limit_service.dtos.limits_dto import BillingPeriodWindow, RecurrenceInterval, Subscription
from limit_service.limits import AllowlistLimit, FlagLimit, MaxLimit, MaxPeriodicLimit

ERRORS = {}


async def no_count(options, window=None):
    return None


def count_of(total):
    async def query(options, window=None):
        return total

    return query


@pytest.fixture
def subscription():
    return Subscription(
        interval=RecurrenceInterval.MONTH,
        start_date=datetime(2021, 9, 18, 19, 0, 52, tzinfo=timezone.utc),
    )


class TestErrorMessages:
    """Test rendering of limit error messages."""

    def test_formats_numbers(self):
        """Test that large numbers get thousands separators."""
        limit = MaxLimit(
            name="test",
            max_count=35000000,
            errors=ERRORS,
            current_count_query=no_count,
            error="Your plan supports up to {{max}} staff users. Please upgrade to add more."
        )

        error = limit.generate_error(35000001)

        assert error.message == "Your plan supports up to 35,000,000 staff users. Please upgrade to add more."
        assert error.error_details["limit"] == 35000000
        assert error.error_details["total"] == 35000001

    def test_supports_max_count_and_name(self):
        """Test that {{max}}, {{count}} and {{name}} are all substituted."""
        limit = MaxLimit(
            name="Test Resources",
            max_count=5,
            errors=ERRORS,
            current_count_query=no_count,
            error=(
                "{{name}} limit reached. Your plan supports up to {{max}} staff users. "
                "You are currently at {{count}} staff users.Please upgrade to add more."
            )
        )

        error = limit.generate_error(7)

        assert error.message == (
            "Test Resources limit reached. Your plan supports up to 5 staff users. "
            "You are currently at 7 staff users.Please upgrade to add more."
        )
        assert error.error_details == {"name": "Test Resources", "limit": 5, "total": 7}
        assert error.error_type == "HostLimitError"

    def test_errors_mapping_used_without_own_error(self):
        """Test that the per-kind template applies when the limit has none."""
        limit = MaxLimit("staff", 2, {"max": "Only {{max}} {{name}} allowed, you have {{total}}."})

        assert limit.generate_error(3).message == "Only 2 staff allowed, you have 3."

    def test_fallback_message(self):
        """Test the built-in message when no template is configured."""
        limit = MaxLimit("customIntegrations", 2, ERRORS)

        assert limit.generate_error(3).message == (
            "This action would exceed the custom integrations limit on your current plan."
        )

    def test_flag_fallback_message(self):
        """Test the built-in flag message."""
        limit = FlagLimit("customThemes", True, ERRORS)

        assert limit.generate_error().message == (
            "Your plan does not support custom themes. Please upgrade to enable custom themes."
        )


class TestMaxLimit:
    """Test absolute maximum limits."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "max_count, count, is_over, would_go_over",
        [
            (2, 5, True, True),
            (100, 100, False, True),
            (100, 99, False, False),
            (0, 0, False, True),
            (0, 1, True, True),
        ],
    )
    async def test_thresholds(self, max_count, count, is_over, would_go_over):
        """Test strict over-limit and one-more comparisons."""
        limit = MaxLimit("staff", max_count, ERRORS, current_count_query=count_of(count))

        assert await limit.is_over_limit() is is_over
        assert await limit.would_go_over_limit() is would_go_over
        assert (await limit.error_if_is_over_limit() is not None) is is_over
        assert (await limit.error_if_would_go_over_limit() is not None) is would_go_over

    @pytest.mark.asyncio
    async def test_error_if_is_over_limit(self):
        """Test the error returned for an exceeded limit."""
        limit = MaxLimit("staff", 2, ERRORS, current_count_query=count_of(5))

        error = await limit.error_if_is_over_limit()

        assert isinstance(error, HostLimitError)
        assert error.error_details == {"name": "staff", "limit": 2, "total": 5}

    @pytest.mark.asyncio
    async def test_query_returning_nothing_is_rejected(self):
        """Test that a count query must return an integer."""
        limit = MaxLimit("staff", 2, ERRORS, current_count_query=no_count)

        with pytest.raises(IncorrectUsageError):
            await limit.is_over_limit()


class TestMaxPeriodicLimit:
    """Test limits scoped to the billing period."""

    def test_requires_subscription(self):
        """Test that construction fails without a subscription."""
        with pytest.raises(IncorrectUsageError) as exc_info:
            MaxPeriodicLimit("emails", 3, ERRORS, None)

        assert "periodic max limit without a subscription" in exc_info.value.message

    def test_exposes_subscription(self, subscription):
        """Test the interval and start date taken from the subscription."""
        limit = MaxPeriodicLimit("emails", 3, ERRORS, subscription)

        assert limit.interval is RecurrenceInterval.MONTH
        assert limit.start_date == datetime(2021, 9, 18, 19, 0, 52, tzinfo=timezone.utc)

    def test_current_billing_period_window(self, subscription):
        """Test the window containing a given moment."""
        limit = MaxPeriodicLimit("emails", 3, ERRORS, subscription)

        window = limit.current_billing_period_window(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))

        assert window.start == datetime(2026, 10, 18, 19, 0, 52, tzinfo=timezone.utc)
        assert window.end == datetime(2026, 11, 18, 19, 0, 52, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_query_receives_current_window(self, subscription):
        """Test that the count query is given the current billing window."""
        received = []

        async def query(options, window):
            received.append((options, window))
            return 4

        limit = MaxPeriodicLimit("emails", 3, ERRORS, subscription, current_count_query=query)
        options = {"transacting": object()}

        error = await limit.error_if_is_over_limit(options)

        assert error.error_details == {"name": "emails", "limit": 3, "total": 4}
        assert len(received) == 1
        assert received[0][0] is options
        window = received[0][1]
        assert isinstance(window, BillingPeriodWindow)
        assert datetime.now(timezone.utc) in window


class TestAllowlistLimit:
    """Test allowlist limits."""

    @pytest.mark.asyncio
    async def test_requires_value(self):
        """Test that checks need a value to test against the allowlist."""
        limit = AllowlistLimit("customThemes", ["casper", "dawn"], ERRORS)

        with pytest.raises(IncorrectUsageError) as exc_info:
            await limit.error_if_is_over_limit()

        assert exc_info.value.message == "Attempted to check an allowlist limit without a value"

    @pytest.mark.asyncio
    async def test_checks_membership(self):
        """Test values inside and outside the allowlist."""
        limit = AllowlistLimit("customThemes", ["casper", "dawn"], ERRORS)

        assert await limit.error_if_would_go_over_limit({"value": "casper"}) is None

        error = await limit.error_if_would_go_over_limit({"value": "lyra"})
        assert error.error_details == {"name": "customThemes", "value": "lyra"}
        assert await limit.is_over_limit({"value": "lyra"}) is True

    @pytest.mark.asyncio
    async def test_empty_value_is_checked(self):
        """Test that an empty value is checked against the allowlist rather than rejected."""
        limit = AllowlistLimit("customThemes", ["casper", "dawn"], ERRORS)

        error = await limit.error_if_is_over_limit({"value": ""})

        assert error.error_details == {"name": "customThemes", "value": ""}


class TestFlagLimit:
    """Test feature flag limits."""

    @pytest.mark.asyncio
    async def test_disabled_flag_only_blocks_new_usage(self):
        """Test that a disabled flag reports over limit but returns no error for existing usage."""
        limit = FlagLimit("customThemes", True, ERRORS)

        assert await limit.is_over_limit() is True
        assert await limit.would_go_over_limit() is True
        assert await limit.error_if_is_over_limit() is None
        assert isinstance(await limit.error_if_would_go_over_limit(), HostLimitError)

    @pytest.mark.asyncio
    async def test_enabled_flag(self):
        """Test that an enabled flag is never over its limit."""
        limit = FlagLimit("customThemes", False, ERRORS)

        assert await limit.is_over_limit() is False
        assert await limit.error_if_would_go_over_limit() is None
