# app/tasks/transitions.py
from dataclasses import replace
from datetime import date

from app.domain.records import ReservationRecord


def mark_notified(r: ReservationRecord, today: date) -> ReservationRecord:
    """
    Ready -> Notified. Returns a new record, the caller persists it.
    Applying it again with the same day gives an equal record.
    """
    if r.notification_sent and r.availability_date is not None:
        # never moves an existing availability date
        return r
    return replace(r, notification_sent=True, availability_date=today)
