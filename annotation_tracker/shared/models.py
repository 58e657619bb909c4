"""
Shared Models Module

This module contains shared enums used across the application.

Features:
- Time slot enum
- Location enum
- Ordered slot labels

Author: Annotation Tracker Team
"""

from enum import Enum

class TimeSlot(str, Enum):
    """
    Hourly reporting slot.

    Values are the labels shown on the dashboard, in working-day order.
    """
    NINE_TEN = "9-10"
    TEN_ELEVEN = "10-11"
    ELEVEN_TWELVE = "11-12"
    TWELVE_ONE = "12-1"
    ONE_TWO = "1-2"
    TWO_THREE = "2-3"
    THREE_FOUR = "3-4"
    FOUR_FIVE = "4-5"
    FIVE_SIX = "5-6"

class Location(str, Enum):
    """
    Office location an entry was reported from.

    Attributes:
        VYOM: Vyom office
        RCITY: RCity office
        RSM: RSM office
    """
    VYOM = "vyom"
    RCITY = "rcity"
    RSM = "rsm"

TIME_SLOTS = [slot.value for slot in TimeSlot]
LOCATIONS = [location.value for location in Location]
