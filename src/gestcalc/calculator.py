"""
Gestation calculator.

Pure functions that turn a reference date and a dating method into an effective
LMP, the milestone dates counted from it, and the elapsed gestation at a given
date. Nothing here reads the clock; "today" is always passed in by the caller.
"""

import datetime
import typing
from dataclasses import dataclass

from .dating import DATING_OFFSETS, DatingMethod
from .milestone import MILESTONES, MilestoneDate

MethodLike = typing.Union[DatingMethod, str, None]

# Reference dates whose effective LMP and due date both fit in datetime.date
MIN_REFERENCE_DATE = datetime.date.min - datetime.timedelta(days=min(DATING_OFFSETS.values()))
MAX_REFERENCE_DATE = datetime.date.max - datetime.timedelta(days=MILESTONES[-1].day_offset)


class GestationAge(typing.NamedTuple):
    """
    Elapsed gestation as whole weeks plus remainder days.

    Uses floor division, so `days` is always in 0..6 and a date before the
    effective LMP gives negative weeks (e.g. -3 days -> weeks=-1, days=4).
    """

    weeks: int
    days: int

    @classmethod
    def from_days(cls, total_days: int) -> "GestationAge":
        weeks, days = divmod(total_days, 7)
        return cls(weeks=weeks, days=days)

    @property
    def total_days(self) -> int:
        return self.weeks * 7 + self.days


@dataclass(frozen=True)
class PregnancyEstimate:
    """
    Everything derived from one (reference date, method) pair.

    Attributes:
        reference_date: Date supplied by the caller.
        method: Dating method the reference date was measured with.
        effective_lmp: Reference date shifted back by the method offset.
        as_of: Date the gestation age is measured at.
        gestation_age: Elapsed weeks/days from effective_lmp to as_of.
        milestones: Milestone dates in ascending order.
    """

    reference_date: datetime.date
    method: DatingMethod
    effective_lmp: datetime.date
    as_of: datetime.date
    gestation_age: GestationAge
    milestones: tuple[MilestoneDate, ...]

    @property
    def due_date(self) -> datetime.date:
        return self.milestones[-1].date


def compute_effective_lmp(
    reference_date: datetime.date, method: MethodLike = DatingMethod.LMP
) -> datetime.date:
    """
    Shift `reference_date` by the fixed offset of `method`.
    Unknown or missing methods count as LMP, i.e. no shift.
    Defined for MIN_REFERENCE_DATE..MAX_REFERENCE_DATE; dates closer to the
    ends of datetime.date overflow.
    """
    offset = DATING_OFFSETS[DatingMethod.from_label(method)]
    return reference_date + datetime.timedelta(days=offset)


def compute_milestones(effective_lmp: datetime.date) -> list[MilestoneDate]:
    # effective_lmp must leave room for the due date (at most MAX_REFERENCE_DATE)
    return [
        MilestoneDate(milestone.label, effective_lmp + datetime.timedelta(days=milestone.day_offset))
        for milestone in MILESTONES
    ]


def compute_gestation_age(
    effective_lmp: datetime.date, as_of: datetime.date
) -> GestationAge:
    """
    Days from `effective_lmp` to `as_of`, split into weeks and days.
    Negative spans (as_of before the LMP) are kept, not clamped.
    """
    return GestationAge.from_days((as_of - effective_lmp).days)


def estimate_pregnancy(
    reference_date: datetime.date,
    method: MethodLike,
    as_of: datetime.date,
) -> PregnancyEstimate:
    dating_method = DatingMethod.from_label(method)
    effective_lmp = compute_effective_lmp(reference_date, dating_method)
    return PregnancyEstimate(
        reference_date=reference_date,
        method=dating_method,
        effective_lmp=effective_lmp,
        as_of=as_of,
        gestation_age=compute_gestation_age(effective_lmp, as_of),
        milestones=tuple(compute_milestones(effective_lmp)),
    )
