"""
Entry Data Models Module

This module defines the data models for hourly annotation entries.

Features:
- Entry submission validation
- Rule-driven field constraints
- Storage document conversion
- Response serialization

Data Models:
- EntryCreate: submitted entry
- stored entry documents (plain dicts)

Dependencies:
- Pydantic for validation
- bson for ObjectId handling
- datetime for timestamps

Author: Annotation Tracker Team
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional
from datetime import date, datetime, timezone
import re

from annotation_tracker.shared.config import ENTRY_FIELD_RULES
from annotation_tracker.shared.models import Location, TimeSlot

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def rule_field(name: str) -> Any:
    """
    Build a pydantic Field for a wire field from ENTRY_FIELD_RULES.

    Only constraints present in the rule are passed through, so string
    rules never reach integer fields and vice versa.
    """
    rule = ENTRY_FIELD_RULES.get(name, {})
    constraints = {
        "min_length": rule.get("min_length"),
        "max_length": rule.get("max_length"),
        "ge": rule.get("numeric_min"),
    }
    kwargs = {key: value for key, value in constraints.items() if value is not None}
    default = ... if rule.get("required", True) else None
    return Field(default, alias=name, **kwargs)

class EntryCreate(BaseModel):
    """
    Entry submission model.

    Attributes:
        user_name (str): Annotator name
        qa_name (str): QA reviewer name
        annotation_count (int): Annotations completed in the slot
        anticipated_count (int): Annotations expected in the slot
        time_slot (TimeSlot): Hourly slot label
        location (Location): Office location
        entry_date (date): Work date (YYYY-MM-DD)
        timestamp (Optional[datetime]): Creation time, set server-side if absent
    """
    user_name: str = rule_field("userName")
    qa_name: str = rule_field("qaName")
    annotation_count: int = rule_field("annotationCount")
    anticipated_count: int = rule_field("anticipatedCount")
    time_slot: TimeSlot = rule_field("timeSlot")
    location: Location = rule_field("location")
    entry_date: date = rule_field("date")
    timestamp: Optional[datetime] = rule_field("timestamp")

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "userName": "alice",
                "qaName": "QA1",
                "annotationCount": 42,
                "anticipatedCount": 40,
                "timeSlot": "9-10",
                "location": "vyom",
                "date": "2024-01-01"
            }
        }
    )

    @field_validator("annotation_count", "anticipated_count", mode="before")
    @classmethod
    def reject_boolean_counts(cls, value: Any) -> Any:
        # numeric strings such as "35" still coerce to int
        if isinstance(value, bool):
            raise ValueError("count must be an integer, not a boolean")
        return value

    @field_validator("entry_date", mode="before")
    @classmethod
    def require_iso_date_string(cls, value: Any) -> Any:
        if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
            raise ValueError("date must be a YYYY-MM-DD string")
        return value

    def to_document(self) -> Dict[str, Any]:
        """Storage document using the camelCase wire keys."""
        return {
            "userName": self.user_name,
            "qaName": self.qa_name,
            "annotationCount": self.annotation_count,
            "anticipatedCount": self.anticipated_count,
            "timeSlot": self.time_slot.value,
            "location": self.location.value,
            "date": self.entry_date.isoformat(),
            "timestamp": self.timestamp or datetime.now(timezone.utc),
        }

def serialize_entry(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Replace Mongo's _id with a string id for JSON responses."""
    entry = {key: value for key, value in doc.items() if key != "_id"}
    if "_id" in doc:
        entry["id"] = str(doc["_id"])
    return entry
