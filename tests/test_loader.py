import pandas as pd
from gestcalc.loader import load_sheets_as_tables, normalize_headers


def test_normalize_headers_snake_case_and_renames():
    df = pd.DataFrame(columns=["Date (YYYY-MM-DD)", " Method: ", "Clinic Name"])
    out = normalize_headers(df)
    assert list(out.columns) == ["reference_date", "dating_method", "clinic_name"]


def test_normalize_headers_keeps_explicit_target_column():
    """An explicit reference_date column wins over a loose 'date' column."""
    df = pd.DataFrame(columns=["reference_date", "date"])
    out = normalize_headers(df)
    assert list(out.columns) == ["reference_date", "date"]


def test_load_csv_as_single_table(dating_csv):
    tables = load_sheets_as_tables(dating_csv)
    assert list(tables) == ["patients"]
    df = tables["patients"]
    assert list(df.index) == ["P1", "P2", "P3"]
    assert {"reference_date", "dating_method"}.issubset(df.columns)


def test_load_workbook_one_table_per_sheet(dating_workbook):
    tables = load_sheets_as_tables(dating_workbook)
    assert set(tables) == {"dating", "notes"}
    assert list(tables["dating"].columns) == ["reference_date", "dating_method"]
    assert list(tables["dating"].index) == ["P1", "P2"]


def test_normalize_headers_renames_only_first_alias_per_target():
    df = pd.DataFrame(columns=["date", "reference", "method", "basis"])
    out = normalize_headers(df)
    assert list(out.columns) == ["reference_date", "reference", "dating_method", "basis"]
    assert out.columns.is_unique
