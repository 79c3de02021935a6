import dataclasses
import pytest
from gestcalc.milestone import MILESTONES, Milestone


def test_milestone_table_is_fixed_and_ordered():
    assert [(m.label, m.day_offset) for m in MILESTONES] == [
        ("Week Four", 28),
        ("Week Five + Two Days", 37),
        ("Week Seven", 49),
        ("Week Nine", 63),
        ("Week Eleven", 77),
        ("Estimated Due Date", 280),
    ]
    offsets = [m.day_offset for m in MILESTONES]
    assert offsets == sorted(offsets)


def test_milestone_keys_are_snake_case():
    assert [m.key for m in MILESTONES] == [
        "week_four",
        "week_five_two_days",
        "week_seven",
        "week_nine",
        "week_eleven",
        "estimated_due_date",
    ]


def test_milestone_is_immutable():
    m = Milestone("Week Four", 28)
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.day_offset = 30
