"""
Pickup date and edit deadline calculations.

Orders are collected once a week on the seller's pickup day and can be placed,
edited or cancelled until the deadline a few days before. All functions take
``now`` explicitly (falling back to the current time) so results only depend
on their arguments.

Pickup dates are represented as local midnight of the pickup day.
"""

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

import config
from enums.deadline_warning_level import DeadlineWarningLevel
from enums.order_window_status import OrderWindowStatus
from enums.text_entity import TextEntity
from models.order_schedule import OrderScheduleConfig
from utils.localizator import Localizator

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Timezone for date keys and deadlines.

    Uses the given IANA name, then config.TIMEZONE, then the system's local timezone.
    """
    name = name if name is not None else config.TIMEZONE
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo


def to_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def from_millis(millis: int, tz: Optional[tzinfo] = None) -> datetime:
    return (_EPOCH + timedelta(milliseconds=millis)).astimezone(tz or resolve_timezone())


class OrderDateUtils:

    @staticmethod
    def _context(now: Optional[datetime], tz: Optional[tzinfo],
                 schedule: Optional[OrderScheduleConfig]) -> tuple[datetime, tzinfo, OrderScheduleConfig]:
        tz = tz or resolve_timezone()
        now = now.astimezone(tz) if now is not None else datetime.now(tz)
        return now, tz, schedule or OrderScheduleConfig.from_config()

    @staticmethod
    def _local_midnight(moment: datetime, tz: tzinfo) -> datetime:
        return datetime.combine(moment.astimezone(tz).date(), time.min, tzinfo=tz)

    @staticmethod
    def calculate_edit_deadline(pickup_date: datetime, tz: Optional[tzinfo] = None,
                                schedule: Optional[OrderScheduleConfig] = None) -> datetime:
        """
        Last instant at which an order for the given pickup can be changed.

        Args:
            pickup_date: Any moment on a pickup day

        Returns:
            Deadline weekday before the pickup at deadline_hour:deadline_minute:59.999999

        Raises:
            ValueError: If pickup_date is not on the configured pickup weekday
        """
        tz = tz or resolve_timezone()
        schedule = schedule or OrderScheduleConfig.from_config()
        local_pickup = pickup_date.astimezone(tz)
        if local_pickup.weekday() != schedule.pickup_day:
            raise ValueError(
                f"{local_pickup.date()} is not a pickup day (expected weekday {schedule.pickup_day})"
            )

        deadline_date = local_pickup.date() - timedelta(days=schedule.days_from_deadline_to_pickup)
        return datetime.combine(
            deadline_date,
            time(schedule.deadline_hour, schedule.deadline_minute, 59, 999999),
            tzinfo=tz
        )

    @staticmethod
    def can_edit_order(pickup_date: datetime, now: Optional[datetime] = None, tz: Optional[tzinfo] = None,
                       schedule: Optional[OrderScheduleConfig] = None) -> bool:
        """
        True until the edit deadline of the pickup has passed.

        Never cache the result: it changes with the clock.
        """
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        return now <= OrderDateUtils.calculate_edit_deadline(pickup_date, tz, schedule)

    @staticmethod
    def calculate_next_pickup_date(now: Optional[datetime] = None, tz: Optional[tzinfo] = None,
                                   schedule: Optional[OrderScheduleConfig] = None) -> datetime:
        """
        Next pickup day that can still be ordered for, as local midnight.

        A pickup whose deadline already passed is skipped in favour of the
        following week.
        """
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        days_until = (schedule.pickup_day - now.weekday()) % 7 or 7
        candidate = OrderDateUtils._local_midnight(now, tz) + timedelta(days=days_until)

        while not OrderDateUtils.can_edit_order(candidate, now, tz, schedule):
            candidate += timedelta(days=7)
        return candidate

    @staticmethod
    def available_pickup_dates(count: Optional[int] = None, now: Optional[datetime] = None,
                               tz: Optional[tzinfo] = None,
                               schedule: Optional[OrderScheduleConfig] = None) -> list[datetime]:
        """
        Next ``count`` pickup dates that are in the future and still open for orders.

        Args:
            count: Number of dates, defaults to config.AVAILABLE_PICKUP_DATES_COUNT

        Returns:
            Ascending list of local-midnight pickup dates
        """
        count = count if count is not None else config.AVAILABLE_PICKUP_DATES_COUNT
        if count <= 0:
            return []

        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        first = OrderDateUtils.calculate_next_pickup_date(now, tz, schedule)
        return [first + timedelta(days=7 * week) for week in range(count)]

    @staticmethod
    def is_pickup_date_valid(pickup_date: datetime, now: Optional[datetime] = None, tz: Optional[tzinfo] = None,
                             schedule: Optional[OrderScheduleConfig] = None) -> bool:
        """
        True if the date is a future pickup day whose deadline has not passed.
        """
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        if pickup_date.astimezone(tz).weekday() != schedule.pickup_day:
            return False
        return pickup_date > now and OrderDateUtils.can_edit_order(pickup_date, now, tz, schedule)

    @staticmethod
    def get_order_window_status(pickup_date: datetime, now: Optional[datetime] = None,
                                tz: Optional[tzinfo] = None,
                                schedule: Optional[OrderScheduleConfig] = None) -> OrderWindowStatus:
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        if now >= OrderDateUtils._local_midnight(pickup_date, tz) + timedelta(days=1):
            return OrderWindowStatus.PICKUP_PASSED
        if not OrderDateUtils.can_edit_order(pickup_date, now, tz, schedule):
            return OrderWindowStatus.DEADLINE_PASSED
        return OrderWindowStatus.OPEN

    @staticmethod
    def is_current_ordering_cycle(pickup_date: datetime, now: Optional[datetime] = None,
                                  tz: Optional[tzinfo] = None,
                                  schedule: Optional[OrderScheduleConfig] = None) -> bool:
        """True if the pickup is the one buyers are currently ordering for."""
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        next_pickup = OrderDateUtils.calculate_next_pickup_date(now, tz, schedule)
        return pickup_date.astimezone(tz).date() == next_pickup.date()

    @staticmethod
    def time_until_deadline(pickup_date: datetime, now: Optional[datetime] = None,
                            tz: Optional[tzinfo] = None,
                            schedule: Optional[OrderScheduleConfig] = None) -> timedelta:
        """Remaining time to edit, negative once the deadline passed."""
        now, tz, schedule = OrderDateUtils._context(now, tz, schedule)
        return OrderDateUtils.calculate_edit_deadline(pickup_date, tz, schedule) - now

    @staticmethod
    def format_time_until_deadline(pickup_date: datetime, now: Optional[datetime] = None,
                                   tz: Optional[tzinfo] = None,
                                   schedule: Optional[OrderScheduleConfig] = None,
                                   lang: Optional[str] = None) -> str:
        """
        Localized countdown, e.g. "2 days, 5 hours" or "45 minutes".
        """
        remaining = OrderDateUtils.time_until_deadline(pickup_date, now, tz, schedule)
        if remaining < timedelta(0):
            return Localizator.get_text(TextEntity.COMMON, "time_deadline_passed", lang=lang)

        days = remaining.days
        hours, rest = divmod(remaining.seconds, 3600)
        minutes = rest // 60

        if days > 0:
            return Localizator.get_text(TextEntity.COMMON, "time_days_hours", lang=lang).format(
                days=days, hours=hours)
        if hours > 0:
            return Localizator.get_text(TextEntity.COMMON, "time_hours_minutes", lang=lang).format(
                hours=hours, minutes=minutes)
        if minutes > 0:
            return Localizator.get_text(TextEntity.COMMON, "time_minutes", lang=lang).format(minutes=minutes)
        return Localizator.get_text(TextEntity.COMMON, "time_less_than_minute", lang=lang)

    @staticmethod
    def get_deadline_warning_level(pickup_date: datetime, now: Optional[datetime] = None,
                                   tz: Optional[tzinfo] = None,
                                   schedule: Optional[OrderScheduleConfig] = None) -> DeadlineWarningLevel:
        remaining = OrderDateUtils.time_until_deadline(pickup_date, now, tz, schedule)
        if remaining < timedelta(0):
            return DeadlineWarningLevel.EXPIRED
        if remaining > timedelta(hours=48):
            return DeadlineWarningLevel.NONE
        if remaining > timedelta(hours=24):
            return DeadlineWarningLevel.INFO
        if remaining > timedelta(hours=6):
            return DeadlineWarningLevel.WARNING
        if remaining > timedelta(hours=1):
            return DeadlineWarningLevel.URGENT
        return DeadlineWarningLevel.CRITICAL

    @staticmethod
    def format_date_key(moment: datetime, tz: Optional[tzinfo] = None) -> str:
        """YYYYMMDD of the moment in the local timezone, used as order storage key."""
        return moment.astimezone(tz or resolve_timezone()).strftime("%Y%m%d")

    @staticmethod
    def format_display_date(moment: datetime, tz: Optional[tzinfo] = None) -> str:
        return moment.astimezone(tz or resolve_timezone()).strftime("%d.%m.%Y")

    @staticmethod
    def format_display_date_time(moment: datetime, tz: Optional[tzinfo] = None) -> str:
        return moment.astimezone(tz or resolve_timezone()).strftime("%d.%m.%Y %H:%M")
