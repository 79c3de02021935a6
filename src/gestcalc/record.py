"""
Dating record domain model.

Defines the DatingRecord dataclass for one row of batch input.
"""

import datetime
import re
from dataclasses import dataclass

from .calculator import MAX_REFERENCE_DATE, MIN_REFERENCE_DATE
from .dating import DatingMethod

# Patterns
_VALID_ID = re.compile(r"^[A-Za-z0-9_.\-]+$")


@dataclass
class DatingRecord:
    """
    Represents the dating information supplied for one patient.

    Attributes:
        patient_ID: Unique patient identifier (letters, digits, '_', '.', '-').
        reference_date: Calendar date of the dating event.
        dating_method: How reference_date relates to the LMP.
    """

    patient_ID: str
    reference_date: datetime.date
    dating_method: DatingMethod = DatingMethod.LMP

    def __post_init__(self):
        # Validate patient ID
        if not isinstance(self.patient_ID, str) or not _VALID_ID.match(self.patient_ID):
            raise ValueError(f"Invalid patient ID: {self.patient_ID!r}")

        # Validate reference date; datetimes carry a time component we do not use
        if isinstance(self.reference_date, datetime.datetime) or not isinstance(
            self.reference_date, datetime.date
        ):
            raise ValueError(f"Invalid reference_date: {self.reference_date!r}")
        if not MIN_REFERENCE_DATE <= self.reference_date <= MAX_REFERENCE_DATE:
            raise ValueError(
                f"reference_date {self.reference_date} outside {MIN_REFERENCE_DATE}..{MAX_REFERENCE_DATE}"
            )

        # Validate method
        if not isinstance(self.dating_method, DatingMethod):
            raise ValueError(
                f"dating_method must be a DatingMethod, got {type(self.dating_method).__name__}"
            )
