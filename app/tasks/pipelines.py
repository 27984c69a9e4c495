# app/tasks/pipelines.py
"""
Scheduled batch runs.

Each run: fetch -> filter -> build payload -> send -> (reservations) mark and persist.
- GatewayError stops the run and is re-raised to whoever triggered it.
- DeliveryError / InvalidRecordError only cost the current record.
- The same pipeline never runs twice at once; different pipelines may.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Iterable

from app.errors import DeliveryError, GatewayError, InvalidRecordError
from app.services.mail_service import Notifier
from app.services.record_gateway import RecordGateway
from app.tasks.payloads import build_late_borrow_payload, build_reservation_ready_payload
from app.tasks.rules import is_expired_reservation, is_late_borrow, is_notifiable_reservation
from app.tasks.transitions import mark_notified

logger = logging.getLogger(__name__)

LATE_BORROWS = "late_borrows"
RESERVATIONS = "reservations"

_locks = {
    LATE_BORROWS: threading.Lock(),
    RESERVATIONS: threading.Lock(),
}


@dataclass
class RunReport:
    pipeline: str
    today: date | None = None
    skipped: bool = False
    candidates: int = 0
    dispatched: int = 0
    delivery_failures: int = 0
    invalid_records: int = 0
    updated: int = 0
    deleted_ids: list = field(default_factory=list)

    @property
    def deleted(self) -> int:
        return len(self.deleted_ids)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["today"] = self.today.isoformat() if self.today else None
        data["deleted"] = self.deleted
        return data

    def summary(self) -> str:
        return (
            f"candidates={self.candidates} dispatched={self.dispatched} "
            f"delivery_failures={self.delivery_failures} invalid={self.invalid_records} "
            f"updated={self.updated} deleted={self.deleted}"
        )


@contextmanager
def _exclusive(pipeline: str):
    lock = _locks[pipeline]
    acquired = lock.acquire(blocking=False)
    try:
        yield acquired
    finally:
        if acquired:
            lock.release()


def _dispatch(notifier: Notifier, payload, report: RunReport, tag: str, record_id) -> None:
    try:
        notifier.send(payload.recipient, payload.subject, payload.body)
        report.dispatched += 1
    except DeliveryError as e:
        report.delivery_failures += 1
        logger.warning(f"[{tag}] delivery failed for record {record_id}: {e}")


def run_late_borrow_notifications(gateway: RecordGateway, notifier: Notifier, today: date) -> RunReport:
    report = RunReport(pipeline=LATE_BORROWS, today=today)

    with _exclusive(LATE_BORROWS) as acquired:
        if not acquired:
            logger.warning("[late_borrows] previous run still in progress, skipped")
            report.skipped = True
            return report

        logger.info("[late_borrows] Sending emails for late borrows")
        try:
            borrows = gateway.list_borrows()
        except GatewayError:
            logger.exception("[late_borrows] could not fetch borrows, run aborted")
            raise

        for b in borrows:
            if not is_late_borrow(b, today):
                continue
            report.candidates += 1

            try:
                payload = build_late_borrow_payload(b)
            except InvalidRecordError as e:
                report.invalid_records += 1
                logger.error(f"[late_borrows] {e}")
                continue

            _dispatch(notifier, payload, report, LATE_BORROWS, b.id)

        logger.info(f"[late_borrows] {report.summary()}")
    return report


def cleanup_expired_reservations(gateway: RecordGateway, today: date) -> list:
    """Delete every notified reservation whose hold window is over. Returns deleted ids."""
    logger.debug("[reservations] Deleting outdated reservations")

    deleted = []
    for r in gateway.list_reservations():
        if is_expired_reservation(r, today):
            gateway.delete_reservation(r.id)
            deleted.append(r.id)
    return deleted


def notify_ready_reservations(
    gateway: RecordGateway,
    notifier: Notifier,
    today: date,
    skip_ids: Iterable = (),
    report: RunReport | None = None,
) -> RunReport:
    """
    Mail every reservation at the head of its queue that was not notified yet,
    then mark it notified. The mark happens even when the mail could not be sent.
    """
    report = report or RunReport(pipeline=RESERVATIONS, today=today)
    skipped = set(skip_ids)

    logger.info("[reservations] Sending notification emails for available reservations")
    for r in gateway.list_reservations():
        if r.id in skipped or not is_notifiable_reservation(r):
            continue
        report.candidates += 1

        try:
            payload = build_reservation_ready_payload(r)
        except InvalidRecordError as e:
            report.invalid_records += 1
            logger.error(f"[reservations] {e}")
            continue

        _dispatch(notifier, payload, report, RESERVATIONS, r.id)

        gateway.update_reservation(r.id, mark_notified(r, today))
        report.updated += 1

    return report


def run_reservation_lifecycle(gateway: RecordGateway, notifier: Notifier, today: date) -> RunReport:
    report = RunReport(pipeline=RESERVATIONS, today=today)

    with _exclusive(RESERVATIONS) as acquired:
        if not acquired:
            logger.warning("[reservations] previous run still in progress, skipped")
            report.skipped = True
            return report

        try:
            # cleanup always first: nothing deleted here may be notified below
            report.deleted_ids = cleanup_expired_reservations(gateway, today)
            notify_ready_reservations(gateway, notifier, today, skip_ids=report.deleted_ids, report=report)
        except GatewayError:
            logger.exception(f"[reservations] record store failure, run aborted ({report.summary()})")
            raise

        logger.info(f"[reservations] {report.summary()}")
    return report
