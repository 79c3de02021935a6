"""
Dating method domain model.

Defines how a reference date relates to the last menstrual period (LMP), and the
fixed day offset used to turn that reference date into an effective LMP.
"""

import logging
import re
import typing
from enum import Enum

LOGGER = logging.getLogger(__name__)


class DatingMethod(Enum):
    """
    Enumeration of the supported conception-dating methods.
    The value of each member is the label shown to the user.
    """
    LMP = "LMP"
    OPK = "OPK"
    IUI_IVF_TRANSFER = "TVOR/IUI"
    BLASTOCYST_DAY3 = "Day 3"
    BLASTOCYST_DAY5 = "Day 5"

    @property
    def label(self) -> str:
        return self.value

    @property
    def offset_days(self) -> int:
        return DATING_OFFSETS[self]

    @classmethod
    def parse(cls, label: typing.Any) -> typing.Optional["DatingMethod"]:
        """
        Strict lookup of a method by label, member name or common spelling.
        Returns None when the label is empty or not recognized.
        """
        if isinstance(label, DatingMethod):
            return label
        if label is None:
            return None
        key = re.sub(r"[\s_\-+/]+", "", str(label)).casefold()
        if not key:
            return None
        return _ALIASES.get(key)

    @classmethod
    def from_label(cls, label: typing.Any) -> "DatingMethod":
        """
        Total lookup: unknown or missing labels fall back to LMP (offset 0).
        """
        method = cls.parse(label)
        if method is None:
            LOGGER.debug(f"Unrecognized dating method {label!r}; using LMP")
            return cls.LMP
        return method


# Days from the true LMP back to the reference date, per method.
# All non-LMP events happen after the LMP, hence the negative offsets.
DATING_OFFSETS: dict[DatingMethod, int] = {
    DatingMethod.LMP: 0,
    DatingMethod.OPK: -13,
    DatingMethod.IUI_IVF_TRANSFER: -14,
    DatingMethod.BLASTOCYST_DAY3: -17,
    DatingMethod.BLASTOCYST_DAY5: -19,
}

# Normalized spelling (no spaces, underscores, dashes, plus or slash signs) → method
_ALIASES: dict[str, DatingMethod] = {
    "lmp": DatingMethod.LMP,
    "opk": DatingMethod.OPK,
    "tvoriui": DatingMethod.IUI_IVF_TRANSFER,
    "iuiivftransfer": DatingMethod.IUI_IVF_TRANSFER,
    "iui": DatingMethod.IUI_IVF_TRANSFER,
    "ivf": DatingMethod.IUI_IVF_TRANSFER,
    "tvor": DatingMethod.IUI_IVF_TRANSFER,
    "transfer": DatingMethod.IUI_IVF_TRANSFER,
    "day3": DatingMethod.BLASTOCYST_DAY3,
    "blastocystday3": DatingMethod.BLASTOCYST_DAY3,
    "day5": DatingMethod.BLASTOCYST_DAY5,
    "blastocystday5": DatingMethod.BLASTOCYST_DAY5,
}
