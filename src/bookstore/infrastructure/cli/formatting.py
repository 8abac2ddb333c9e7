"""Display helpers shared by CLI commands."""

from __future__ import annotations


def cents(amount: int) -> str:
    """Format minor currency units, e.g. 4498 -> "$44.98", -5 -> "-$0.05"."""
    sign = "-" if amount < 0 else ""
    dollars, remainder = divmod(abs(amount), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"
