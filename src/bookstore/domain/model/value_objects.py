"""Value Objects used by the checkout flow.

Value Objects are immutable and compared by value, not identity.
They encapsulate parsing so an invalid expiry month can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

from bookstore.domain.exceptions import ValidationError

_INTEGER = re.compile(r"[+-]?[0-9]+")
_NON_DIGIT = re.compile(r"[^0-9]")


def digits_only(text: str) -> str:
    """Strip every character that is not an ASCII digit."""
    return _NON_DIGIT.sub("", text)


def _parse_int(text: str | None) -> int:
    if text is None or not _INTEGER.fullmatch(text):
        raise ValueError(f"Not a base-10 integer: {text!r}")
    return int(text)


@dataclass(frozen=True, order=True)
class CardExpiry:
    """Credit-card expiry as a calendar (year, month).

    Field order matters: ``order=True`` compares year first, then month.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not MINYEAR <= self.year <= MAXYEAR:
            raise ValidationError(f"Expiry year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Expiry month out of range: {self.month}")

    def first_day(self) -> date:
        """The expiry pinned to day 1 of its month, with no time-of-day."""
        return date(self.year, self.month, 1)

    def is_before(self, other: CardExpiry) -> bool:
        return self < other

    def __str__(self) -> str:
        return f"{self.month:02d}/{self.year}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def parse(month: str | None, year: str | None) -> CardExpiry:
        """Build from the textual form fields.

        Accepts an optional sign and ASCII digits only; whitespace,
        underscores and empty strings are rejected.
        """
        try:
            return CardExpiry(year=_parse_int(year), month=_parse_int(month))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    @staticmethod
    def current(today: date) -> CardExpiry:
        return CardExpiry(year=today.year, month=today.month)
