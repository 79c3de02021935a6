import pathlib

import pandas as pd

# Columns that need renaming → field names the mapper expects
RENAME_MAP = {
    # reference date columns
    "date": "reference_date",
    "reference": "reference_date",
    "event_date": "reference_date",
    # dating method columns
    "method": "dating_method",
    "basis": "dating_method",
    "dating": "dating_method",
}

CSV_SUFFIXES = {".csv", ".txt"}


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """
    - normalize all headers to snake_case lowercase
    - apply renames from RENAME_MAP
    """
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop any "(…)"
        .str.replace(r"\s+", "_", regex=True)  # spaces → underscore
        .str.replace(":", "", regex=False)  # drop colons
        .str.lower()
    )

    # apply specific renames (e.g. "method" → "dating_method");
    # only the first alias present is renamed per target
    renames: dict[str, str] = {}
    for orig, target in RENAME_MAP.items():
        if orig in df.columns and target not in df.columns and target not in renames.values():
            renames[orig] = target
    return df.rename(columns=renames)


def load_sheets_as_tables(input_path: str) -> dict[str, pd.DataFrame]:
    """
    Read the input into DataFrames keyed by sheet name:
      - Excel workbooks: one table per worksheet
      - CSV files: a single table named after the file stem
      - first row = header, first column = index (patient ID)
    """
    path = pathlib.Path(input_path)
    tables: dict[str, pd.DataFrame] = {}

    if path.suffix.lower() in CSV_SUFFIXES:
        df = pd.read_csv(path, header=0, index_col=0)
        tables[path.stem] = normalize_headers(df)
        return tables

    excel = pd.ExcelFile(path, engine="openpyxl")
    for sheet_name in excel.sheet_names:
        df = pd.read_excel(
            excel, sheet_name=sheet_name, header=0, index_col=0, engine="openpyxl"
        )
        tables[sheet_name] = normalize_headers(df)

    return tables
