"""Cooperative cancellation and deadlines for order placement.

Both are checked by PlaceOrderHandler between storage operations; a
tripped check raises inside the transaction so it is rolled back.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from bookstore.domain.exceptions import DeadlineExceededError, OrderCancelledError


class CancellationToken:
    """Thread-safe flag a request handler can trip from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OrderCancelledError("Order placement was cancelled")


@dataclass(frozen=True)
class Deadline:
    """An absolute instant on the ``time.monotonic()`` clock."""

    expires_at: float

    @staticmethod
    def after(seconds: float) -> Deadline:
        return Deadline(time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def raise_if_expired(self) -> None:
        if self.expired:
            raise DeadlineExceededError("Order placement exceeded its deadline")
