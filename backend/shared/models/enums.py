"""Domain enumerations for the Dota widget job."""
from __future__ import annotations

from enum import Enum


class WidgetType(str, Enum):
    """VK app widget types this job can render."""
    MATCHES = "matches"
    TEXT = "text"
