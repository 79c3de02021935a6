"""
Milestone domain model.

Defines the fixed, ordered table of pregnancy milestones, each expressed as a
day offset from the effective LMP.
"""

import datetime
import re
import typing
from dataclasses import dataclass


@dataclass(frozen=True)
class Milestone:
    """
    A named point of interest counted from the effective LMP.

    Attributes:
        label: Human-readable name (e.g. 'Week Four').
        day_offset: Days after the effective LMP.
    """

    label: str
    day_offset: int

    @property
    def key(self) -> str:
        """snake_case column name for tabular output (e.g. 'week_four')."""
        return re.sub(r"[^a-z0-9]+", "_", self.label.lower()).strip("_")


class MilestoneDate(typing.NamedTuple):
    label: str
    date: datetime.date


# Ascending by offset. Week Five sits at 37 days (five weeks plus two days).
MILESTONES: tuple[Milestone, ...] = (
    Milestone("Week Four", 28),
    Milestone("Week Five + Two Days", 37),
    Milestone("Week Seven", 49),
    Milestone("Week Nine", 63),
    Milestone("Week Eleven", 77),
    Milestone("Estimated Due Date", 280),
)
