"""
Rendering of pregnancy estimates: display lines, JSON-ready dicts, and a
DataFrame for batch output.
"""

import datetime
import typing

import pandas as pd

from .calculator import PregnancyEstimate
from .milestone import MILESTONES

DATE_FORMAT = "%B %d, %Y"

BASE_COLUMNS = [
    "patient_ID",
    "dating_method",
    "reference_date",
    "effective_lmp",
    "gestation_weeks",
    "gestation_days",
]


class EstimateRecord(typing.NamedTuple):
    patient_ID: str
    estimate: PregnancyEstimate


def format_date(value: datetime.date) -> str:
    # e.g. "March 01, 2024"
    return value.strftime(DATE_FORMAT)


def format_estimate(estimate: PregnancyEstimate) -> list[str]:
    """
    Human-readable summary, one line per item:
      Calculation Basis, Effective LMP, Current Gestation, then each milestone.
    """
    age = estimate.gestation_age
    lines = [
        f"Calculation Basis: {estimate.method.label}",
        f"Effective LMP: {format_date(estimate.effective_lmp)}",
        f"Current Gestation: {age.weeks} Weeks, {age.days} Days",
    ]
    for label, date in estimate.milestones:
        lines.append(f"{label}: {format_date(date)}")
    return lines


def estimate_to_dict(estimate: PregnancyEstimate) -> dict[str, typing.Any]:
    return {
        "method": estimate.method.label,
        "reference_date": estimate.reference_date.isoformat(),
        "effective_lmp": estimate.effective_lmp.isoformat(),
        "as_of": estimate.as_of.isoformat(),
        "gestation": {
            "weeks": estimate.gestation_age.weeks,
            "days": estimate.gestation_age.days,
        },
        "milestones": [
            {"label": label, "date": date.isoformat()}
            for label, date in estimate.milestones
        ],
    }


def estimates_to_frame(records: typing.Iterable[EstimateRecord]) -> pd.DataFrame:
    """
    One row per patient; milestone dates go in snake_case columns after the
    base columns (week_four, ..., estimated_due_date).
    """
    columns = BASE_COLUMNS + [milestone.key for milestone in MILESTONES]
    rows = []
    for patient_id, estimate in records:
        row = {
            "patient_ID": patient_id,
            "dating_method": estimate.method.label,
            "reference_date": estimate.reference_date.isoformat(),
            "effective_lmp": estimate.effective_lmp.isoformat(),
            "gestation_weeks": estimate.gestation_age.weeks,
            "gestation_days": estimate.gestation_age.days,
        }
        for milestone, (_, date) in zip(MILESTONES, estimate.milestones):
            row[milestone.key] = date.isoformat()
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
