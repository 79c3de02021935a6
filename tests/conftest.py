import datetime
import pytest
import pandas as pd


@pytest.fixture(scope="session")
def as_of() -> datetime.date:
    """
    Fixed 'today' so gestation ages are reproducible.
    """
    return datetime.date(2024, 3, 2)


@pytest.fixture
def dating_csv(tmp_path) -> str:
    """
    Small CSV with the loose header spellings the loader should rename.
    """
    path = tmp_path / "patients.csv"
    path.write_text(
        "Patient,Date,Method\n"
        "P1,2024-03-01,OPK\n"
        "P2,2024-01-10,Day 5\n"
        "P3,2024-02-01,\n",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def dating_workbook(tmp_path) -> str:
    """
    Excel workbook with one dating sheet (real date cells) and one unrelated sheet.
    """
    dating = pd.DataFrame(
        {
            "Reference Date (YYYY-MM-DD)": [datetime.date(2024, 3, 1), datetime.date(2025, 1, 5)],
            "Dating Method:": ["OPK", "Day 3"],
        },
        index=pd.Index(["P1", "P2"], name="patient"),
    )
    notes = pd.DataFrame({"comment": ["hello"]}, index=pd.Index(["P1"], name="patient"))
    path = tmp_path / "patients.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as w:
        dating.to_excel(w, sheet_name="dating")
        notes.to_excel(w, sheet_name="notes")
    return str(path)
