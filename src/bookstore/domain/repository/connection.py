"""Abstract transactional connection.

Repositories that write take a connection from the caller so several
inserts can share one transaction. Concrete implementations live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TransactionalConnection(ABC):
    """A storage handle supporting atomic commit/rollback.

    Usable as a context manager: leaving the ``with`` block always
    releases the handle, whatever the outcome.
    """

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction; writes stay invisible until commit."""

    @abstractmethod
    def commit(self) -> None:
        """Make every write since ``begin()`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write since ``begin()``."""

    @abstractmethod
    def close(self) -> None:
        """Release the handle back to its pool."""

    def set_timeout(self, seconds: float) -> None:
        """Bound how long each following statement may block.

        Backends without a per-statement timeout leave this a no-op.
        """

    def __enter__(self) -> TransactionalConnection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ConnectionProvider(ABC):

    @abstractmethod
    def connect(self) -> TransactionalConnection:
        """Acquire an exclusively owned connection."""
