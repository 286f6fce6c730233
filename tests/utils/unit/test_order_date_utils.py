"""
Unit Tests: OrderDateUtils

Schedule used throughout: pickup on Friday, edit deadline Wednesday 23:59,
Europe/Berlin. 2025-01-10 is a Friday.
"""

from datetime import datetime, timedelta, timezone

import pytest

from enums.deadline_warning_level import DeadlineWarningLevel
from enums.order_window_status import OrderWindowStatus
from utils.order_date_utils import OrderDateUtils, from_millis, to_millis


def berlin(tz, *args):
    return datetime(*args, tzinfo=tz)


class TestEditDeadline:
    """Tests for calculate_edit_deadline() and can_edit_order()."""

    def test_deadline_is_wednesday_before_pickup(self, tz, schedule):
        pickup = berlin(tz, 2025, 1, 10)
        deadline = OrderDateUtils.calculate_edit_deadline(pickup, tz, schedule)
        assert deadline == berlin(tz, 2025, 1, 8, 23, 59, 59, 999999)

    def test_deadline_rejects_non_pickup_day(self, tz, schedule):
        with pytest.raises(ValueError, match="not a pickup day"):
            OrderDateUtils.calculate_edit_deadline(berlin(tz, 2025, 1, 9), tz, schedule)

    def test_can_edit_until_deadline_inclusive(self, tz, schedule):
        pickup = berlin(tz, 2025, 1, 10)
        deadline = berlin(tz, 2025, 1, 8, 23, 59, 59, 999999)
        assert OrderDateUtils.can_edit_order(pickup, deadline, tz, schedule) is True

    def test_cannot_edit_right_after_deadline(self, tz, schedule):
        pickup = berlin(tz, 2025, 1, 10)
        after = berlin(tz, 2025, 1, 8, 23, 59, 59, 999999) + timedelta(microseconds=1)
        assert OrderDateUtils.can_edit_order(pickup, after, tz, schedule) is False

    def test_can_edit_never_flips_back(self, tz, schedule):
        pickup = berlin(tz, 2025, 1, 10)
        start = berlin(tz, 2025, 1, 9, 0, 0)
        for hours in range(0, 72, 6):
            assert OrderDateUtils.can_edit_order(pickup, start + timedelta(hours=hours), tz, schedule) is False

    def test_now_in_other_timezone_is_converted(self, tz, schedule):
        pickup = berlin(tz, 2025, 1, 10)
        # 22:30 UTC is 23:30 in Berlin, still before the deadline
        now_utc = datetime(2025, 1, 8, 22, 30, tzinfo=timezone.utc)
        assert OrderDateUtils.can_edit_order(pickup, now_utc, tz, schedule) is True


class TestNextPickupDate:
    """Tests for calculate_next_pickup_date() and available_pickup_dates()."""

    def test_monday_orders_for_this_friday(self, tz, schedule):
        result = OrderDateUtils.calculate_next_pickup_date(berlin(tz, 2025, 1, 6, 10, 0), tz, schedule)
        assert result == berlin(tz, 2025, 1, 10)

    def test_wednesday_before_deadline_orders_for_this_friday(self, tz, schedule):
        result = OrderDateUtils.calculate_next_pickup_date(berlin(tz, 2025, 1, 8, 23, 59, 0), tz, schedule)
        assert result == berlin(tz, 2025, 1, 10)

    def test_thursday_orders_for_next_week(self, tz, schedule):
        result = OrderDateUtils.calculate_next_pickup_date(berlin(tz, 2025, 1, 9, 8, 0), tz, schedule)
        assert result == berlin(tz, 2025, 1, 17)

    def test_pickup_day_itself_orders_for_next_week(self, tz, schedule):
        result = OrderDateUtils.calculate_next_pickup_date(berlin(tz, 2025, 1, 10, 9, 0), tz, schedule)
        assert result == berlin(tz, 2025, 1, 17)

    def test_available_dates_are_weekly_and_open(self, tz, schedule):
        now = berlin(tz, 2025, 1, 6, 10, 0)
        dates = OrderDateUtils.available_pickup_dates(3, now, tz, schedule)

        assert dates == [berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 17), berlin(tz, 2025, 1, 24)]
        assert all(OrderDateUtils.is_pickup_date_valid(date, now, tz, schedule) for date in dates)

    def test_available_dates_skip_closed_week(self, tz, schedule):
        dates = OrderDateUtils.available_pickup_dates(2, berlin(tz, 2025, 1, 9, 0, 0), tz, schedule)
        assert dates == [berlin(tz, 2025, 1, 17), berlin(tz, 2025, 1, 24)]

    def test_available_dates_with_zero_count(self, tz, schedule):
        assert OrderDateUtils.available_pickup_dates(0, berlin(tz, 2025, 1, 6), tz, schedule) == []

    def test_available_dates_default_count_from_config(self, tz, schedule):
        dates = OrderDateUtils.available_pickup_dates(None, berlin(tz, 2025, 1, 6), tz, schedule)
        assert len(dates) == 5


class TestPickupDateValidity:
    """Tests for is_pickup_date_valid()."""

    def test_open_pickup_is_valid(self, tz, schedule):
        assert OrderDateUtils.is_pickup_date_valid(
            berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 6, 10, 0), tz, schedule) is True

    def test_wrong_weekday_is_invalid(self, tz, schedule):
        assert OrderDateUtils.is_pickup_date_valid(
            berlin(tz, 2025, 1, 9), berlin(tz, 2025, 1, 6, 10, 0), tz, schedule) is False

    def test_pickup_after_deadline_is_invalid(self, tz, schedule):
        assert OrderDateUtils.is_pickup_date_valid(
            berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 9, 0, 0), tz, schedule) is False

    def test_past_pickup_is_invalid(self, tz, schedule):
        assert OrderDateUtils.is_pickup_date_valid(
            berlin(tz, 2025, 1, 3), berlin(tz, 2025, 1, 6, 10, 0), tz, schedule) is False


class TestOrderWindow:
    """Tests for get_order_window_status() and is_current_ordering_cycle()."""

    def test_open_before_deadline(self, tz, schedule):
        status = OrderDateUtils.get_order_window_status(berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 6), tz, schedule)
        assert status == OrderWindowStatus.OPEN

    def test_deadline_passed_before_pickup(self, tz, schedule):
        status = OrderDateUtils.get_order_window_status(berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 9), tz, schedule)
        assert status == OrderWindowStatus.DEADLINE_PASSED

    def test_pickup_passed_after_pickup_day(self, tz, schedule):
        status = OrderDateUtils.get_order_window_status(berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 11), tz, schedule)
        assert status == OrderWindowStatus.PICKUP_PASSED

    def test_current_cycle(self, tz, schedule):
        now = berlin(tz, 2025, 1, 6, 10, 0)
        assert OrderDateUtils.is_current_ordering_cycle(berlin(tz, 2025, 1, 10), now, tz, schedule) is True
        assert OrderDateUtils.is_current_ordering_cycle(berlin(tz, 2025, 1, 17), now, tz, schedule) is False


class TestDeadlineCountdown:
    """Tests for time_until_deadline(), format_time_until_deadline() and warning levels."""

    def test_time_until_deadline(self, tz, schedule):
        remaining = OrderDateUtils.time_until_deadline(
            berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 8, 23, 0), tz, schedule)
        assert remaining == timedelta(minutes=59, seconds=59, microseconds=999999)

    @pytest.mark.parametrize("now_args, expected", [
        ((2025, 1, 6, 10, 0), "2 days, 13 hours"),
        ((2025, 1, 8, 20, 30), "3 hours, 29 minutes"),
        ((2025, 1, 8, 23, 15), "44 minutes"),
        ((2025, 1, 8, 23, 59, 30), "Less than 1 minute"),
        ((2025, 1, 9, 0, 0), "Deadline passed"),
    ])
    def test_format_time_until_deadline(self, tz, schedule, now_args, expected):
        text = OrderDateUtils.format_time_until_deadline(
            berlin(tz, 2025, 1, 10), berlin(tz, *now_args), tz, schedule, lang="en")
        assert text == expected

    def test_format_time_until_deadline_german(self, tz, schedule):
        text = OrderDateUtils.format_time_until_deadline(
            berlin(tz, 2025, 1, 10), berlin(tz, 2025, 1, 9, 0, 0), tz, schedule, lang="de")
        assert text == "Frist abgelaufen"

    @pytest.mark.parametrize("now_args, expected", [
        ((2025, 1, 6, 10, 0), DeadlineWarningLevel.NONE),
        ((2025, 1, 7, 12, 0), DeadlineWarningLevel.INFO),
        ((2025, 1, 8, 10, 0), DeadlineWarningLevel.WARNING),
        ((2025, 1, 8, 20, 0), DeadlineWarningLevel.URGENT),
        ((2025, 1, 8, 23, 30), DeadlineWarningLevel.CRITICAL),
        ((2025, 1, 9, 8, 0), DeadlineWarningLevel.EXPIRED),
    ])
    def test_deadline_warning_level(self, tz, schedule, now_args, expected):
        level = OrderDateUtils.get_deadline_warning_level(
            berlin(tz, 2025, 1, 10), berlin(tz, *now_args), tz, schedule)
        assert level == expected


class TestFormatting:
    """Tests for date keys, display formats and millis conversion."""

    def test_date_key(self, tz):
        assert OrderDateUtils.format_date_key(berlin(tz, 2025, 1, 10), tz) == "20250110"

    def test_date_key_uses_local_timezone(self, tz):
        # 23:30 UTC on the 9th is already the 10th in Berlin
        assert OrderDateUtils.format_date_key(datetime(2025, 1, 9, 23, 30, tzinfo=timezone.utc), tz) == "20250110"

    def test_display_date(self, tz):
        assert OrderDateUtils.format_display_date(berlin(tz, 2025, 1, 10), tz) == "10.01.2025"
        assert OrderDateUtils.format_display_date_time(berlin(tz, 2025, 1, 10, 8, 5), tz) == "10.01.2025 08:05"

    def test_millis_conversion(self, tz):
        assert to_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000
        pickup = berlin(tz, 2025, 1, 10)
        assert from_millis(to_millis(pickup), tz) == pickup
