import abc
import datetime
import logging
import math
import typing

import pandas as pd
from stairval.notepad import Notepad

from .calculator import estimate_pregnancy
from .dating import DatingMethod
from .record import DatingRecord
from .report import EstimateRecord

LOGGER = logging.getLogger(__name__)

PATIENT_ID_COLUMN = "patient_ID"

# Minimal required columns (after renaming) to treat a sheet as dating input
DATING_KEY_COLUMNS = {"reference_date"}

# Accepted layouts for reference dates given as text or numbers
DATE_FORMATS = ("%Y%m%d", "%d.%m.%Y", "%m/%d/%Y")


class TableMapper(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def apply_mapping(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> typing.Sequence[EstimateRecord]:
        # return one estimate per usable row, not intermediate records.
        raise NotImplementedError


class DefaultMapper(TableMapper):
    def __init__(self, as_of: datetime.date):
        """
        `as_of` is the date gestation age is measured at (normally today).
        """
        self._as_of = as_of

    def apply_mapping(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> list[EstimateRecord]:
        """
        Process:
        1) choose the sheets that carry reference dates
        2) map rows to DatingRecords
        3) estimate each record at `as_of`
        """
        dating_tables = self._choose_dating_tables(tables, notepad)
        records: list[DatingRecord] = []
        for sheet_name, df in dating_tables.items():
            records.extend(self._map_dating_table(sheet_name, df, notepad))

        return [
            EstimateRecord(
                record.patient_ID,
                estimate_pregnancy(record.reference_date, record.dating_method, self._as_of),
            )
            for record in records
        ]

    @staticmethod
    def _prepare_sheet(df: pd.DataFrame) -> pd.DataFrame:
        """Bring the index into a column and name it 'patient_ID'."""
        working = df.reset_index()
        original = working.columns[0]
        return working.rename(columns={original: PATIENT_ID_COLUMN})

    @staticmethod
    def _is_blank(value: typing.Any) -> bool:
        # Handle None, NaN, NaT, pandas NA, and empty/whitespace-only strings
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False

    @staticmethod
    def _to_date(value: typing.Any) -> datetime.date:
        """
        Reference dates:
        - datetime / pandas.Timestamp -> calendar date (time dropped)
        - date -> as is
        - integers like 20240301 -> 2024-03-01
        - strings in ISO form, or one of DATE_FORMATS
        Raises ValueError when no interpretation fits.
        """
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if pd.api.types.is_number(value) and not isinstance(value, bool):
            if not math.isfinite(value) or float(value) != int(value):
                raise ValueError(f"Cannot parse reference date from {value!r}")
            text = str(int(value))
        else:
            text = str(value).strip()
        try:
            return datetime.datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Cannot parse reference date from {value!r}")

    @staticmethod
    def parse_dating_row(
            row: pd.Series, sheet_name: str, notepad: Notepad
    ) -> typing.Optional[DatingRecord]:
        """
        Parse one row into a DatingRecord, or None if the row is unusable.
        - missing/invalid reference date -> error, row skipped
        - missing method -> LMP
        - unrecognized method -> warning, LMP
        """
        patient_id = str(row[PATIENT_ID_COLUMN]).strip()
        where = f"Sheet {sheet_name!r}, row {patient_id!r}"

        raw_date = row.get("reference_date")
        if DefaultMapper._is_blank(raw_date):
            notepad.add_error(f"{where}: missing reference date")
            return None
        try:
            reference_date = DefaultMapper._to_date(raw_date)
        except ValueError as e:
            notepad.add_error(f"{where}: {e}")
            return None

        raw_method = row.get("dating_method")
        if DefaultMapper._is_blank(raw_method):
            dating_method = DatingMethod.LMP
        else:
            dating_method = DatingMethod.parse(raw_method)
            if dating_method is None:
                notepad.add_warning(f"{where}: unrecognized dating method {raw_method!r}; using LMP")
                dating_method = DatingMethod.LMP

        try:
            return DatingRecord(
                patient_ID=patient_id,
                reference_date=reference_date,
                dating_method=dating_method,
            )
        except ValueError as e:
            notepad.add_error(f"{where}: {e}")
            return None

    def _choose_dating_tables(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> dict[str, pd.DataFrame]:
        """
        Keep every sheet that has a reference date column; warn about the rest.
        """
        selected: dict[str, pd.DataFrame] = {}
        for sheet_name, df in tables.items():
            if DATING_KEY_COLUMNS.issubset(df.columns):
                selected[sheet_name] = df
            else:
                notepad.add_warning(
                    f"Skipping sheet {sheet_name!r}: missing columns {sorted(DATING_KEY_COLUMNS - set(df.columns))}"
                )

        # Hard-minimum: at least one sheet must carry dates
        if not selected:
            notepad.add_error("No sheet with a 'reference_date' column was found.")
        return selected

    def _map_dating_table(
            self, sheet_name: str, df: pd.DataFrame, notepad: Notepad
    ) -> list[DatingRecord]:
        """
        Sheet-level wrapper:
          - normalize index to 'patient_ID'
          - delegate row conversion to parse_dating_row
          - warn about repeated patient IDs (rows are still kept)
        """
        working = self._prepare_sheet(df)
        LOGGER.debug(f"Sheet {sheet_name!r}: mapping {len(working)} rows")

        records: list[DatingRecord] = []
        seen: set[str] = set()
        for _, row in working.iterrows():
            record = self.parse_dating_row(row, sheet_name, notepad)
            if record is None:
                continue
            if record.patient_ID in seen:
                notepad.add_warning(f"Sheet {sheet_name!r}: duplicate patient ID {record.patient_ID!r}")
            seen.add(record.patient_ID)
            records.append(record)
        return records
