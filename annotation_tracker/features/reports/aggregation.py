"""
Aggregation Module

Pure functions turning a list of entries into per-(user, date, location)
performance summaries and dashboard figures. Nothing here performs I/O or
keeps state between calls; summaries are recomputed from the full entry
list every time.

Entries are plain mappings with the camelCase keys used on the wire and in
storage (userName, qaName, annotationCount, ...).

Author: Annotation Tracker Team
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from annotation_tracker.shared.config import HOURLY_THRESHOLD, DAILY_THRESHOLD

SummaryKey = Tuple[str, str, str]

class UserDaySummary(BaseModel):
    """
    Aggregated performance of one user on one date at one location.

    Attributes:
        user_name (str): Annotator name
        qa_name (str): QA name of the most recently folded entry
        date (str): Work date
        location (str): Office location
        total_annotations (int): Sum of every entry's annotation count
        slot_counts (Dict[str, int]): Latest annotation count per time slot
        anticipated_total (int): Sum of every entry's anticipated count
        low_hourly_count (int): Entries below the hourly threshold
    """
    user_name: str
    qa_name: str
    date: str
    location: str
    total_annotations: int = 0
    slot_counts: Dict[str, int] = Field(default_factory=dict)
    anticipated_total: int = 0
    low_hourly_count: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def key(self) -> SummaryKey:
        return (self.user_name, self.date, self.location)

    @computed_field
    @property
    def low_total(self) -> bool:
        return self.total_annotations < DAILY_THRESHOLD

    @computed_field
    @property
    def low_slots(self) -> Dict[str, bool]:
        return {slot: count < HOURLY_THRESHOLD for slot, count in self.slot_counts.items()}

    @computed_field
    @property
    def met_percent(self) -> float:
        if not self.slot_counts:
            return 0.0
        met = sum(1 for count in self.slot_counts.values() if count >= HOURLY_THRESHOLD)
        return met / len(self.slot_counts) * 100

class DashboardStats(BaseModel):
    """Headline figures shown above the performance table."""
    total_entries: int
    active_users: int
    users_below_daily: int
    low_hourly_entries: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

def entry_key(entry: Mapping[str, Any]) -> SummaryKey:
    return (entry["userName"], entry["date"], entry["location"])

def belongs_to(entry: Mapping[str, Any], summary: UserDaySummary) -> bool:
    """Shared grouping predicate for summarize and export."""
    return entry_key(entry) == summary.key

def summarize(entries: Sequence[Mapping[str, Any]]) -> List[UserDaySummary]:
    """
    Group entries by (userName, date, location).

    Entries are folded in the order given. A repeated time slot keeps the
    later entry's count, while the total adds every entry, so a group with
    duplicate slots has a total larger than the sum of its slot counts.

    Args:
        entries: Entries in fold order

    Returns:
        list: Summaries in first-seen group order
    """
    summaries: Dict[SummaryKey, UserDaySummary] = {}
    for entry in entries:
        key = entry_key(entry)
        summary = summaries.get(key)
        if summary is None:
            summary = UserDaySummary(
                user_name=entry["userName"],
                qa_name=entry["qaName"],
                date=entry["date"],
                location=entry["location"]
            )
            summaries[key] = summary

        count = entry["annotationCount"]
        summary.qa_name = entry["qaName"]
        summary.total_annotations += count
        summary.slot_counts[entry["timeSlot"]] = count
        summary.anticipated_total += entry.get("anticipatedCount") or 0
        if count < HOURLY_THRESHOLD:
            summary.low_hourly_count += 1

    return list(summaries.values())

def count_below_hourly_threshold(entries: Sequence[Mapping[str, Any]]) -> int:
    return sum(1 for entry in entries if entry["annotationCount"] < HOURLY_THRESHOLD)

def dashboard_stats(entries: Sequence[Mapping[str, Any]]) -> DashboardStats:
    summaries = summarize(entries)
    return DashboardStats(
        total_entries=len(entries),
        active_users=len(summaries),
        users_below_daily=sum(1 for summary in summaries if summary.low_total),
        low_hourly_entries=count_below_hourly_threshold(entries)
    )
