"""
Test Aggregation Module

This module tests the user/day summary computation including:
- Grouping by user, date and location
- Slot overwrite versus total accumulation
- Threshold flags and met percentage
- Dashboard statistics
"""

import pytest

from annotation_tracker.features.reports.aggregation import (
    summarize,
    count_below_hourly_threshold,
    dashboard_stats
)
from annotation_tracker.shared.models import TIME_SLOTS

def test_empty_entries_give_no_summaries():
    assert summarize([]) == []

def test_single_low_entry(make_entry):
    """Scenario A: one entry below both thresholds"""
    entries = [make_entry(annotationCount=20, anticipatedCount=25)]

    [summary] = summarize(entries)

    assert summary.total_annotations == 20
    assert summary.slot_counts == {"9-10": 20}
    assert summary.low_total is True
    assert summary.low_slots == {"9-10": True}
    assert summary.anticipated_total == 25

def test_duplicate_slot_keeps_last_count_but_sums_total(make_entry):
    """Scenario B: later slot value wins, total adds both"""
    entries = [
        make_entry(annotationCount=10),
        make_entry(annotationCount=15),
    ]

    [summary] = summarize(entries)

    assert summary.total_annotations == 25
    assert summary.slot_counts["9-10"] == 15

def test_full_day_above_thresholds(make_entry):
    """Scenario C: many distinct slots each meeting the hourly threshold"""
    slots = [f"slot-{i}" for i in range(20)]
    entries = [
        make_entry(userName="bob", date="2024-01-02", location="rsm", timeSlot=slot, annotationCount=40)
        for slot in slots
    ]

    [summary] = summarize(entries)

    assert summary.total_annotations == 800
    assert summary.low_total is False
    assert not any(summary.low_slots.values())
    assert summary.met_percent == 100

def test_groups_partition_entries(make_entry):
    entries = [
        make_entry(userName="alice", location="vyom"),
        make_entry(userName="alice", location="rsm"),
        make_entry(userName="bob", location="vyom"),
        make_entry(userName="alice", location="vyom", date="2024-01-02"),
        make_entry(userName="alice", location="vyom", timeSlot="10-11"),
    ]

    summaries = summarize(entries)

    assert [s.key for s in summaries] == [
        ("alice", "2024-01-01", "vyom"),
        ("alice", "2024-01-01", "rsm"),
        ("bob", "2024-01-01", "vyom"),
        ("alice", "2024-01-02", "vyom"),
    ]
    assert sum(s.total_annotations for s in summaries) == sum(e["annotationCount"] for e in entries)

def test_grouping_is_case_sensitive(make_entry):
    summaries = summarize([make_entry(userName="Alice"), make_entry(userName="alice")])
    assert len(summaries) == 2

def test_qa_name_does_not_split_groups(make_entry):
    entries = [
        make_entry(qaName="QA1", annotationCount=10, anticipatedCount=5),
        make_entry(qaName="QA2", timeSlot="10-11", annotationCount=12, anticipatedCount=7),
    ]

    [summary] = summarize(entries)

    assert summary.qa_name == "QA2"
    assert summary.total_annotations == 22
    assert summary.anticipated_total == 12

@pytest.mark.parametrize("total,low", [(499, True), (500, False), (501, False)])
def test_daily_threshold_boundary(make_entry, total, low):
    [summary] = summarize([make_entry(annotationCount=total)])
    assert summary.low_total is low

@pytest.mark.parametrize("count,low", [(29, True), (30, False)])
def test_hourly_threshold_boundary(make_entry, count, low):
    [summary] = summarize([make_entry(annotationCount=count)])
    assert summary.low_slots["9-10"] is low

def test_met_percent_counts_slots_not_entries(make_entry):
    entries = [
        make_entry(timeSlot="9-10", annotationCount=40),
        make_entry(timeSlot="10-11", annotationCount=10),
        make_entry(timeSlot="11-12", annotationCount=30),
        make_entry(timeSlot="12-1", annotationCount=5),
    ]

    [summary] = summarize(entries)

    assert summary.met_percent == 50
    assert summary.low_hourly_count == 2

def test_met_percent_without_slots_is_zero():
    from annotation_tracker.features.reports.aggregation import UserDaySummary
    summary = UserDaySummary(user_name="x", qa_name="q", date="2024-01-01", location="vyom")
    assert summary.met_percent == 0

def test_summarize_does_not_mutate_entries(make_entry):
    entries = [make_entry(), make_entry(annotationCount=5)]
    snapshot = [dict(e) for e in entries]
    summarize(entries)
    assert entries == snapshot

def test_summary_serializes_camel_case(make_entry):
    [summary] = summarize([make_entry(annotationCount=20)])
    data = summary.model_dump(by_alias=True)
    assert data["userName"] == "alice"
    assert data["totalAnnotations"] == 20
    assert data["slotCounts"] == {"9-10": 20}

def test_count_below_hourly_threshold(make_entry):
    entries = [make_entry(annotationCount=c) for c in (0, 29, 30, 31)]
    assert count_below_hourly_threshold(entries) == 2
    assert count_below_hourly_threshold([]) == 0

def test_dashboard_stats(make_entry):
    entries = [
        make_entry(userName="alice", annotationCount=20),
        make_entry(userName="bob", timeSlot=TIME_SLOTS[0], annotationCount=300),
        make_entry(userName="bob", timeSlot=TIME_SLOTS[1], annotationCount=300),
    ]

    stats = dashboard_stats(entries)

    assert stats.total_entries == 3
    assert stats.active_users == 2
    assert stats.users_below_daily == 1
    assert stats.low_hourly_entries == 1
