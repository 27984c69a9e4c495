# app/services/record_gateway.py
from __future__ import annotations

from typing import Protocol

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.domain.records import (
    AvailableCopyRef,
    BookRef,
    BorrowRecord,
    LibraryRef,
    ReservationRecord,
    UserRef,
)
from app.errors import GatewayError
from app.repositories.borrow_repo import BorrowRepo
from app.repositories.reservation_repo import ReservationRepo


class RecordGateway(Protocol):
    def list_borrows(self) -> list[BorrowRecord]: ...

    def list_reservations(self) -> list[ReservationRecord]: ...

    def update_reservation(self, reservation_id: int, record: ReservationRecord) -> None: ...

    def delete_reservation(self, reservation_id: int) -> None: ...


def _user_ref(user) -> UserRef | None:
    if not user or not user.email:
        return None
    return UserRef(email=user.email)


def _book_ref(book) -> BookRef | None:
    return BookRef(title=book.title) if book else None


def _library_ref(library) -> LibraryRef | None:
    return LibraryRef(name=library.name) if library else None


def borrow_to_record(row) -> BorrowRecord:
    return BorrowRecord(
        id=row.id,
        book=_book_ref(row.book),
        library=_library_ref(row.library),
        user=_user_ref(row.user),
        due_date=row.due_date,
        returned=bool(row.book_returned),
    )


def reservation_to_record(row) -> ReservationRecord:
    copy = row.available_copy
    copy_ref = None
    if copy and copy.book and copy.library:
        copy_ref = AvailableCopyRef(book=_book_ref(copy.book), library=_library_ref(copy.library))

    return ReservationRecord(
        id=row.id,
        position=row.position,
        available_copy=copy_ref,
        user=_user_ref(row.user),
        notification_sent=bool(row.notification_sent),
        availability_date=row.availability_date,
    )


class SqlRecordGateway:
    """
    Record gateway backed by the Flask-SQLAlchemy session.
    - Rows are joined through their relationships and returned as plain records.
    - Any SQLAlchemy failure is rolled back and surfaced as GatewayError.
    - Deleting a reservation that no longer exists is a no-op.
    """

    def list_borrows(self) -> list[BorrowRecord]:
        try:
            return [borrow_to_record(b) for b in BorrowRepo.list_all()]
        except SQLAlchemyError as e:
            raise self._fail("list_borrows", e) from e

    def list_reservations(self) -> list[ReservationRecord]:
        try:
            return [reservation_to_record(r) for r in ReservationRepo.list_all()]
        except SQLAlchemyError as e:
            raise self._fail("list_reservations", e) from e

    def update_reservation(self, reservation_id: int, record: ReservationRecord) -> None:
        try:
            row = ReservationRepo.get(reservation_id)
            if row is None:
                raise GatewayError(f"reservation {reservation_id} not found")

            # only the batch-owned fields are written back
            row.notification_sent = record.notification_sent
            row.availability_date = record.availability_date
            ReservationRepo.commit()
        except SQLAlchemyError as e:
            raise self._fail("update_reservation", e) from e

    def delete_reservation(self, reservation_id: int) -> None:
        try:
            row = ReservationRepo.get(reservation_id)
            if row is None:
                current_app.logger.debug(f"[gateway] reservation {reservation_id} already deleted")
                return
            ReservationRepo.delete(row)
        except SQLAlchemyError as e:
            raise self._fail("delete_reservation", e) from e

    @staticmethod
    def _fail(operation: str, exc: Exception) -> GatewayError:
        ReservationRepo.rollback()
        return GatewayError(f"{operation} failed: {exc}")
