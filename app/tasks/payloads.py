# app/tasks/payloads.py
"""
Mail payloads for the batch.

Builders only read the record they are given. The wording below is what
users receive and is kept verbatim.
"""
import logging

from app.domain.records import BorrowRecord, NotificationPayload, ReservationRecord
from app.errors import InvalidRecordError

logger = logging.getLogger(__name__)

SIGNATURE = "\nCordialement.\nOC-Bibliothèque."

LATE_BORROW_SUBJECT = "Date de retour dépassée du livre {title}"
LATE_BORROW_BODY = (
    "L'emprunt du livre \"{title}\""
    " a dépassé sa date d'échéance, veuillez nous ramener le livre à la bibliothèque de {library}"
    " dans les plus brefs délais." + SIGNATURE
)

RESERVATION_READY_SUBJECT = "Réservation du livre: {title}"
RESERVATION_READY_BODY = (
    "Le livre \"{title}\""
    " que vous avez réservé est disponible à la bibliothèque de {library}"
    " vous disposez de 48h pour venir le récupérer, au delà la réservation sera annulée." + SIGNATURE
)


def _recipient(record) -> str:
    user = record.user
    if user is None or not user.email:
        raise InvalidRecordError(record.id, "missing user email")
    return user.email


def build_late_borrow_payload(b: BorrowRecord) -> NotificationPayload:
    logger.debug(f"[payloads] late borrow mail, id={b.id}")

    to = _recipient(b)
    if b.book is None or b.library is None:
        raise InvalidRecordError(b.id, "missing book or library")

    return NotificationPayload(
        recipient=to,
        subject=LATE_BORROW_SUBJECT.format(title=b.book.title),
        body=LATE_BORROW_BODY.format(title=b.book.title, library=b.library.name),
    )


def build_reservation_ready_payload(r: ReservationRecord) -> NotificationPayload:
    logger.debug(f"[payloads] reservation mail, id={r.id}")

    to = _recipient(r)
    copy = r.available_copy
    if copy is None or copy.book is None or copy.library is None:
        raise InvalidRecordError(r.id, "missing available copy")

    return NotificationPayload(
        recipient=to,
        subject=RESERVATION_READY_SUBJECT.format(title=copy.book.title),
        body=RESERVATION_READY_BODY.format(title=copy.book.title, library=copy.library.name),
    )
