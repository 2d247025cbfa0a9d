"""Unit tests for schedule grouping and ordering."""

from bell_api.services.aggregate import group_schedule_rows, orphan_rows, persistable_groups
from bell_api.services.normalize import ORPHAN


def _row(description, start, end="", day="US D1", block="-"):
    return {
        "Description": description,
        "Start Time": start,
        "End Time": end,
        "Block Schedule": block,
        "Day": day,
    }


def test_events_sorted_by_start_time():
    rows = [
        _row("Block D - US", "1:15 pm"),
        _row("Block A - US", "9:00 am"),
        _row("Lunch", "12:00 pm"),
        _row("Early", "12:30 am"),
    ]
    groups = group_schedule_rows(rows)

    starts = [e["startTime"] for e in groups["US Day 1"].events]
    assert starts == ["12:30 AM", "9:00 AM", "12:00 PM", "1:15 PM"]


def test_sort_is_stable_for_equal_times():
    rows = [_row("First", "10:00 AM"), _row("Second", "10:00 AM"), _row("Zero", "8:00 AM")]
    names = [e["name"] for e in group_schedule_rows(rows)["US Day 1"].events]
    assert names == ["Zero", "First", "Second"]


def test_groups_keep_first_seen_order():
    rows = [
        _row("A", "8:00 AM", day="US D2"),
        _row("B", "8:00 AM", day="-", block="X Day - US"),
        _row("C", "9:00 AM", day="US D2"),
        _row("D", "8:00 AM", day="US D1"),
    ]
    groups = group_schedule_rows(rows)

    assert list(groups) == ["US Day 2", "X Day - US", "US Day 1"]
    assert groups["X Day - US"].friendly_name == "X Day"
    assert len(groups["US Day 2"].events) == 2


def test_orphans_excluded_from_persistable_groups():
    rows = [
        _row("A", "8:00 AM"),
        _row("Mystery", "9:00 AM", day="TBD"),
        _row("Other", "bad time", day="??"),
    ]
    groups = group_schedule_rows(rows)

    assert [g.name for g in persistable_groups(groups)] == ["US Day 1"]
    orphans = orphan_rows(groups)
    assert [r["Description"] for r in orphans] == ["Mystery", "Other"]
    assert orphans[0]["Day"] == "TBD"
    assert orphans[0]["code"] == "Mystery"
    assert orphans[1]["startTime"] == "BAD TIME"
    assert ORPHAN in groups


def test_no_orphans():
    groups = group_schedule_rows([_row("A", "8:00 AM")])
    assert orphan_rows(groups) == []


def test_to_document():
    group = group_schedule_rows([_row("Block B - US", "8:00 am", "8:45 am")])["US Day 1"]
    assert group.to_document() == {
        "name": "US Day 1",
        "friendly_name": "US Day 1",
        "events": [{"name": "Block B", "code": "B", "startTime": "8:00 AM", "endTime": "8:45 AM"}],
    }
