# app/tasks/rules.py
from datetime import date, timedelta

from app.domain.records import BorrowRecord, ReservationRecord

# a notified reservation is held this many days before it is purged
RESERVATION_HOLD_DAYS = 2


def is_late_borrow(b: BorrowRecord, today: date) -> bool:
    # due today is not late yet
    return b.due_date < today and not b.returned


def is_notifiable_reservation(r: ReservationRecord) -> bool:
    return r.position == 1 and not r.notification_sent


def is_expired_reservation(r: ReservationRecord, today: date) -> bool:
    if r.availability_date is None or not r.notification_sent:
        return False
    return r.availability_date <= today - timedelta(days=RESERVATION_HOLD_DAYS)
