"""Customer entity, created once per placed order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Customer:
    customer_id: int
    name: str
    address: str
    phone: str
    email: str
    cc_number: str
    cc_expiration_date: date  # always the first day of the expiry month
