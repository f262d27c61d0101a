"""
Unit tests for calendar aggregation.
"""
from datetime import date, datetime, timezone, timedelta
from types import SimpleNamespace

import pytest

from applyflow.services.calendar_service import (
    WEEKDAY_NAMES,
    parse_event_date,
    sunday_index,
    build_calendar_events,
    group_events_by_period,
    today_action_items,
    month_bounds,
    build_month_grid,
)


# Wednesday
NOW = datetime(2026, 3, 11, 9, 30, tzinfo=timezone.utc)


def make_interview(id, scheduled, company="Acme", round_name="Onsite", status="Scheduled"):
    return SimpleNamespace(
        id=id,
        round_name=round_name,
        scheduled_date=scheduled,
        status=status,
        application=SimpleNamespace(company_name=company) if company else None,
    )


def make_referral(id, follow_up, person="Dana", company="Globex"):
    return SimpleNamespace(id=id, person_name=person, company=company, follow_up_date=follow_up, status="Pending")


def test_parse_event_date_variants():
    assert parse_event_date("2026-03-11") == date(2026, 3, 11)
    assert parse_event_date("2026-03-11T10:00:00") == datetime(2026, 3, 11, 10, 0)
    with pytest.raises(ValueError):
        parse_event_date("not-a-date")


def test_sunday_index():
    assert sunday_index(date(2026, 3, 8)) == 0  # Sunday
    assert sunday_index(date(2026, 3, 14)) == 6  # Saturday


def test_build_events_titles_and_order():
    events = build_calendar_events(
        interviews=[
            make_interview(1, datetime(2026, 3, 12, 15, 0, tzinfo=timezone.utc)),
            make_interview(2, None),
            make_interview(3, datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc), company=None, round_name="Phone"),
        ],
        referrals=[make_referral(7, date(2026, 3, 11)), make_referral(8, None)],
    )

    assert [e.id for e in events] == ["interview-3", "referral-7", "interview-1"]
    assert events[0].title == "Unknown Company - Phone"
    assert events[1].title == "Follow up with Dana"
    assert events[1].type == "referral-followup"
    assert events[2].title == "Acme - Onsite"
    assert events[2].metadata.interview_id == 1


def test_today_bucket_covers_whole_day():
    """00:00 and 23:59 on the current day are both 'today', never overdue."""
    events = build_calendar_events(
        interviews=[
            make_interview(1, datetime(2026, 3, 11, 0, 0, tzinfo=timezone.utc)),
            make_interview(2, datetime(2026, 3, 11, 23, 59, tzinfo=timezone.utc)),
        ],
    )
    grouped = group_events_by_period(events, now=NOW)

    assert [e.id for e in grouped.today] == ["interview-1", "interview-2"]
    assert grouped.overdue == []


def test_grouping_buckets():
    events = build_calendar_events(
        interviews=[
            make_interview(1, datetime(2026, 3, 9, 10, 0, tzinfo=timezone.utc)),   # Monday, past
            make_interview(2, datetime(2026, 3, 12, 10, 0, tzinfo=timezone.utc)),  # tomorrow
            make_interview(3, datetime(2026, 3, 14, 10, 0, tzinfo=timezone.utc)),  # Saturday
            make_interview(4, datetime(2026, 3, 15, 10, 0, tzinfo=timezone.utc)),  # next Sunday
        ],
        referrals=[make_referral(5, date(2026, 3, 11))],
    )
    grouped = group_events_by_period(events, now=NOW)

    assert [e.id for e in grouped.overdue] == ["interview-1"]
    assert [e.id for e in grouped.today] == ["referral-5"]
    assert [e.id for e in grouped.tomorrow] == ["interview-2"]
    assert [e.id for e in grouped.this_week] == ["interview-3"]
    assert [e.id for e in grouped.later] == ["interview-4"]

    total = sum(len(b) for b in (grouped.overdue, grouped.today, grouped.tomorrow, grouped.this_week, grouped.later))
    assert total == len(events)


def test_grouping_uses_now_timezone():
    # 23:30 UTC on the 10th is already the 11th in UTC+2
    plus_two = timezone(timedelta(hours=2))
    events = build_calendar_events(interviews=[make_interview(1, datetime(2026, 3, 10, 23, 30, tzinfo=timezone.utc))])
    grouped = group_events_by_period(events, now=datetime(2026, 3, 11, 9, 0, tzinfo=plus_two))
    assert [e.id for e in grouped.today] == ["interview-1"]


def test_today_action_items_split_by_type():
    events = build_calendar_events(
        interviews=[make_interview(1, datetime(2026, 3, 11, 14, 0, tzinfo=timezone.utc))],
        referrals=[make_referral(2, date(2026, 3, 11)), make_referral(3, date(2026, 3, 12))],
    )
    items = today_action_items(events, now=NOW)

    assert [e.id for e in items.interviews] == ["interview-1"]
    assert [e.id for e in items.follow_ups] == ["referral-2"]


def test_month_bounds():
    first, last = month_bounds(2026, 2)
    assert first == datetime(2026, 2, 1, 0, 0, 0)
    assert last == datetime(2026, 2, 28, 23, 59, 59)


def test_month_grid_padding_and_days():
    # March 2026 starts on a Sunday, April 2026 on a Wednesday
    march = build_month_grid(2026, 3)
    april = build_month_grid(2026, 4)

    assert march.leading_padding == 0
    assert april.leading_padding == 3
    assert len(march.days) == 31
    assert len(april.days) == 30
    assert march.label == "March 2026"
    assert march.weekday_names == WEEKDAY_NAMES


def test_month_grid_places_events():
    events = build_calendar_events(
        interviews=[make_interview(1, datetime(2026, 3, 11, 23, 59, tzinfo=timezone.utc))],
        referrals=[make_referral(2, date(2026, 3, 11)), make_referral(3, date(2026, 3, 1))],
    )
    grid = build_month_grid(2026, 3, events)

    assert [e.id for e in grid.days[10].events] == ["referral-2", "interview-1"]
    assert [e.id for e in grid.days[0].events] == ["referral-3"]
    assert grid.days[1].events == []


def test_month_grid_places_by_local_day():
    tokyo = timezone(timedelta(hours=9))
    events = build_calendar_events(interviews=[make_interview(1, datetime(2026, 10, 31, 23, 30))])

    assert sum(len(d.events) for d in build_month_grid(2026, 10, events, tz=tokyo).days) == 0
    assert [e.id for e in build_month_grid(2026, 11, events, tz=tokyo).days[0].events] == ["interview-1"]
