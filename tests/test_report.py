import datetime
import json
from gestcalc.calculator import estimate_pregnancy
from gestcalc.report import (
    EstimateRecord,
    estimate_to_dict,
    estimates_to_frame,
    format_date,
    format_estimate,
)


def _opk_estimate():
    return estimate_pregnancy(datetime.date(2024, 3, 1), "OPK", datetime.date(2024, 3, 2))


def test_format_date_uses_month_name_and_padded_day():
    assert format_date(datetime.date(2024, 3, 1)) == "March 01, 2024"


def test_format_estimate_lines():
    assert format_estimate(_opk_estimate()) == [
        "Calculation Basis: OPK",
        "Effective LMP: February 17, 2024",
        "Current Gestation: 2 Weeks, 0 Days",
        "Week Four: March 16, 2024",
        "Week Five + Two Days: March 25, 2024",
        "Week Seven: April 06, 2024",
        "Week Nine: April 20, 2024",
        "Week Eleven: May 04, 2024",
        "Estimated Due Date: November 23, 2024",
    ]


def test_format_estimate_negative_gestation_is_not_clamped():
    estimate = estimate_pregnancy(datetime.date(2024, 3, 10), "LMP", datetime.date(2024, 3, 7))
    assert "Current Gestation: -1 Weeks, 4 Days" in format_estimate(estimate)


def test_estimate_to_dict_is_json_serializable():
    payload = estimate_to_dict(_opk_estimate())
    assert json.loads(json.dumps(payload)) == payload
    assert payload["method"] == "OPK"
    assert payload["effective_lmp"] == "2024-02-17"
    assert payload["gestation"] == {"weeks": 2, "days": 0}
    assert payload["milestones"][0] == {"label": "Week Four", "date": "2024-03-16"}
    assert payload["milestones"][-1] == {"label": "Estimated Due Date", "date": "2024-11-23"}


def test_estimates_to_frame_columns_and_values():
    frame = estimates_to_frame([EstimateRecord("P1", _opk_estimate())])
    assert list(frame.columns) == [
        "patient_ID",
        "dating_method",
        "reference_date",
        "effective_lmp",
        "gestation_weeks",
        "gestation_days",
        "week_four",
        "week_five_two_days",
        "week_seven",
        "week_nine",
        "week_eleven",
        "estimated_due_date",
    ]
    row = frame.iloc[0]
    assert row["patient_ID"] == "P1"
    assert row["effective_lmp"] == "2024-02-17"
    assert row["gestation_weeks"] == 2
    assert row["estimated_due_date"] == "2024-11-23"


def test_estimates_to_frame_empty():
    frame = estimates_to_frame([])
    assert frame.empty
    assert "estimated_due_date" in frame.columns
