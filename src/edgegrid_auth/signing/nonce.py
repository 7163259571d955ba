"""Timestamp and nonce sources for signing."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

TIMESTAMP_FORMAT = "%Y%m%dT%H:%M:%S+0000"


def make_timestamp(moment: datetime | None = None) -> str:
    """
    Format a moment as an EdgeGrid timestamp, e.g. ``20140321T19:34:21+0000``.

    Naive datetimes are taken to be UTC already.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse an EdgeGrid timestamp back into an aware UTC datetime."""
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def now() -> str:
    """Current UTC time, second precision."""
    return make_timestamp()


def nonce() -> str:
    """Fresh random nonce (a UUID4 string)."""
    return str(uuid.uuid4())


class Clock(Protocol):
    """Source of the (timestamp, nonce) pair for one signing call."""

    def timestamp(self) -> str: ...

    def nonce(self) -> str: ...


class SystemClock:
    """Wall clock and random nonces."""

    def timestamp(self) -> str:
        return now()

    def nonce(self) -> str:
        return nonce()


@dataclass(frozen=True)
class FixedClock:
    """Pinned timestamp and nonce, for tests and golden vectors."""

    fixed_timestamp: str
    fixed_nonce: str

    def timestamp(self) -> str:
        return self.fixed_timestamp

    def nonce(self) -> str:
        return self.fixed_nonce
