"""Tests for the insert-then-update drain."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from bell_api.models.day import Day
from bell_api.models.schedule import Schedule
from bell_api.services.upsert import drain


def _days(db):
    return {d.date: d.schedule for d in db.execute(select(Day)).scalars()}


def test_inserts_new_documents(db):
    result = drain(db, Day, "date", [
        {"date": "9-5-24", "schedule": "US Day 2"},
        {"date": "9-6-24", "schedule": "US Day 3"},
    ])

    assert (result.inserted, result.updated) == (2, 0)
    assert _days(db) == {"9-5-24": "US Day 2", "9-6-24": "US Day 3"}


def test_duplicate_key_becomes_update(db):
    drain(db, Day, "date", [{"date": "9-5-24", "schedule": "US Day 2"}])
    original_id = db.execute(select(Day.id)).scalar_one()

    result = drain(db, Day, "date", [{"date": "9-5-24", "schedule": "X Day - US"}])

    assert (result.inserted, result.updated) == (0, 1)
    assert _days(db) == {"9-5-24": "X Day - US"}
    assert db.execute(select(Day.id)).scalar_one() == original_id


def test_duplicate_within_batch_last_row_wins(db):
    drain(db, Day, "date", [
        {"date": "9-5-24", "schedule": "US Day 2"},
        {"date": "9-5-24", "schedule": "US Day 4"},
    ])
    assert _days(db) == {"9-5-24": "US Day 4"}


def test_progress_total_grows_with_updates(db):
    drain(db, Day, "date", [{"date": "9-5-24", "schedule": "US Day 2"}])

    calls = []
    drain(
        db, Day, "date",
        [{"date": "9-5-24", "schedule": "US Day 3"}, {"date": "9-6-24", "schedule": "US Day 4"}],
        progress=lambda done, total, label: calls.append((done, total, label)),
    )

    assert calls == [
        (1, 3, "9-5-24"),
        (2, 3, "9-6-24"),
        (3, 3, "9-5-24 (update)"),
    ]


def test_schedule_replace_is_full(db):
    drain(db, Schedule, "name", [{
        "name": "US Day 1",
        "friendly_name": "US Day 1",
        "events": [{"name": "A", "code": "A", "startTime": "8:00 AM", "endTime": "9:00 AM"}],
    }])
    drain(db, Schedule, "name", [{
        "name": "US Day 1",
        "friendly_name": "US Day 1",
        "events": [{"name": "B", "code": "B", "startTime": "10:00 AM", "endTime": "11:00 AM"}],
    }])

    sch = db.execute(select(Schedule)).scalar_one()
    assert [e["name"] for e in sch.events] == ["B"]


def test_other_integrity_errors_abort(db):
    drain(db, Day, "date", [{"date": "9-5-24", "schedule": "US Day 2"}])

    with pytest.raises(IntegrityError):
        drain(db, Day, "date", [
            {"date": "9-6-24", "schedule": "US Day 3"},
            {"date": "9-7-24", "schedule": None},
            {"date": "9-8-24", "schedule": "US Day 5"},
        ])

    # o que já foi commitado fica
    assert _days(db) == {"9-5-24": "US Day 2", "9-6-24": "US Day 3"}
