"""
Calendar aggregation: turns interviews and referral follow-ups into dated
events, buckets them relative to today and lays them out on a month grid.

Everything here works at day granularity. An event at 00:00 and one at
23:59 on the same day are the same day.
"""
import calendar
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Tuple, Union

from applyflow.schemas.calendar import (
    CalendarEvent,
    CalendarEventMetadata,
    GroupedEvents,
    TodayActionItems,
    CalendarDay,
    MonthGrid,
)

logger = logging.getLogger(__name__)

# Weeks start on Sunday, matching the month grid columns
WEEKDAY_NAMES: List[str] = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

DateLike = Union[date, datetime, str]


def parse_event_date(value: DateLike) -> Union[date, datetime]:
    """
    Normalize an ISO string into a date or datetime.

    Raises:
        ValueError: if the string is not ISO 8601
    """
    if isinstance(value, (date, datetime)):
        return value
    text = value.strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text)
    return date.fromisoformat(text)


def event_day(value: DateLike, tz=None) -> date:
    """
    Calendar day of ``value``, seen from ``tz`` when one is given.

    Naive datetimes are taken as UTC, which is how SQLite hands them back.
    """
    value = parse_event_date(value)
    if isinstance(value, datetime):
        if tz is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            value = value.astimezone(tz)
        return value.date()
    return value


def sunday_index(day: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7


def _sort_key(value: DateLike) -> datetime:
    value = parse_event_date(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def sort_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    return sorted(events, key=lambda event: _sort_key(event.date))


def interview_to_event(interview) -> CalendarEvent:
    application = getattr(interview, "application", None)
    company = getattr(application, "company_name", None)
    status = interview.status.value if hasattr(interview.status, "value") else interview.status
    return CalendarEvent(
        id=f"interview-{interview.id}",
        title=f"{company or 'Unknown Company'} - {interview.round_name}",
        description=f"Interview: {interview.round_name}",
        date=interview.scheduled_date,
        type="interview",
        status=status,
        metadata=CalendarEventMetadata(
            company=company,
            round=interview.round_name,
            interview_id=interview.id,
        ),
    )


def referral_to_event(referral) -> CalendarEvent:
    status = referral.status.value if hasattr(referral.status, "value") else referral.status
    return CalendarEvent(
        id=f"referral-{referral.id}",
        title=f"Follow up with {referral.person_name}",
        description=f"Referral follow-up at {referral.company}",
        date=referral.follow_up_date,
        type="referral-followup",
        status=status,
        metadata=CalendarEventMetadata(
            person=referral.person_name,
            company=referral.company,
            referral_id=referral.id,
        ),
    )


def build_calendar_events(interviews=None, referrals=None) -> List[CalendarEvent]:
    """
    Combine interviews and referral follow-ups into one date-sorted list.

    Interviews without a scheduled date and referrals without a follow-up
    date have nothing to show on a calendar and are skipped.
    """
    events = [interview_to_event(i) for i in (interviews or []) if i.scheduled_date is not None]
    events += [referral_to_event(r) for r in (referrals or []) if r.follow_up_date is not None]
    return sort_events(events)


def group_events_by_period(events, now: Optional[datetime] = None) -> GroupedEvents:
    """
    Partition events into overdue / today / tomorrow / this_week / later.

    Comparison is by calendar day against ``now``'s day, so each event falls
    in exactly one bucket. "This week" is the Sunday-start week containing
    today, minus today and tomorrow.
    """
    now = now or datetime.now(timezone.utc)
    tz = now.tzinfo
    today = now.date()
    tomorrow = today + timedelta(days=1)
    week_end = today + timedelta(days=6 - sunday_index(today))

    grouped = GroupedEvents()

    for event in events or []:
        day = event_day(event.date, tz)

        if day < today:
            grouped.overdue.append(event)
        elif day == today:
            grouped.today.append(event)
        elif day == tomorrow:
            grouped.tomorrow.append(event)
        elif day <= week_end:
            grouped.this_week.append(event)
        else:
            grouped.later.append(event)

    logger.debug(
        f"Events grouped: overdue={len(grouped.overdue)}, today={len(grouped.today)}, "
        f"tomorrow={len(grouped.tomorrow)}, this_week={len(grouped.this_week)}, later={len(grouped.later)}"
    )
    return grouped


def today_action_items(events, now: Optional[datetime] = None) -> TodayActionItems:
    """Today's interviews and follow-ups, split by event type."""
    todays = group_events_by_period(events, now).today
    return TodayActionItems(
        interviews=[e for e in todays if e.type == "interview"],
        follow_ups=[e for e in todays if e.type == "referral-followup"],
    )


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Inclusive [first day 00:00:00, last day 23:59:59] of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1, 0, 0, 0),
        datetime(year, month, last_day, 23, 59, 59),
    )


def build_month_grid(year: int, month: int, events=None, tz=None) -> MonthGrid:
    """
    Map every date of a month to the events on that date.

    ``leading_padding`` is the number of blank cells before day 1 so that
    it lands in its weekday column (Sunday first).
    """
    first_weekday, last_day = calendar.monthrange(year, month)

    by_day = {}
    for event in events or []:
        by_day.setdefault(event_day(event.date, tz), []).append(event)

    days = []
    for day_number in range(1, last_day + 1):
        day = date(year, month, day_number)
        days.append(CalendarDay(date=day, events=by_day.get(day, [])))

    return MonthGrid(
        year=year,
        month=month,
        label=date(year, month, 1).strftime("%B %Y"),
        weekday_names=WEEKDAY_NAMES,
        leading_padding=(first_weekday + 1) % 7,
        days=days,
    )
