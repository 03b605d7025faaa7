import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session


class TransactionTimeout(Exception):
    pass


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Context manager that begins a transaction on the given Session.
    If a transaction is already active, start a nested SAVEPOINT (begin_nested).
    Otherwise start a normal transaction (begin).
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    with cm:
        yield


class Deadline:
    """Monotonic time budget for one unit of work. None means unbounded."""

    def __init__(self, seconds: Optional[float]):
        self.seconds = seconds
        self.expires_at = (
            time.monotonic() + seconds if seconds is not None else None
        )

    def check(self, step: str = ""):
        if self.expires_at is not None and time.monotonic() >= self.expires_at:
            raise TransactionTimeout(
                f"Transaction exceeded {self.seconds}s budget (at step: {step or 'n/a'})"
            )


@contextmanager
def bounded_transaction(
    session: Session, timeout_seconds: Optional[float] = None
) -> Iterator[Deadline]:
    """
    smart_transaction with a time budget.

    Yields a Deadline the caller checks between write steps; raising
    TransactionTimeout inside the block rolls the transaction back like any
    other error. On PostgreSQL each statement is additionally bounded by
    SET LOCAL statement_timeout, which lasts until the transaction ends.
    Usage:
        with bounded_transaction(db, 30) as deadline:
            ... write ...
            deadline.check("variants")
    """
    deadline = Deadline(timeout_seconds)
    with smart_transaction(session):
        if timeout_seconds is not None and session.get_bind().dialect.name == "postgresql":
            ms = max(1, int(timeout_seconds * 1000))
            session.execute(text(f"SET LOCAL statement_timeout = {ms}"))
        yield deadline
