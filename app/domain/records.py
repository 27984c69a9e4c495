# app/domain/records.py
"""
Plain records handed to the batch by the record gateway.

The gateway delivers them already joined (user, book, library); the rule
engine only reads fields from them and never goes back to the store.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class BookRef:
    title: str


@dataclass(frozen=True)
class LibraryRef:
    name: str


@dataclass(frozen=True)
class UserRef:
    email: str


@dataclass(frozen=True)
class AvailableCopyRef:
    book: BookRef
    library: LibraryRef


@dataclass(frozen=True)
class BorrowRecord:
    id: int
    book: Optional[BookRef]
    library: Optional[LibraryRef]
    user: Optional[UserRef]
    due_date: date
    returned: bool = False


@dataclass(frozen=True)
class ReservationRecord:
    id: int
    position: int
    available_copy: Optional[AvailableCopyRef]
    user: Optional[UserRef]
    notification_sent: bool = False
    # set together with notification_sent, never on its own
    availability_date: Optional[date] = None


@dataclass(frozen=True)
class NotificationPayload:
    recipient: str
    subject: str
    body: str
