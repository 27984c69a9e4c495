from datetime import date

import pytest

from app import create_app
from app.config import TestConfig
from app.domain.records import (
    AvailableCopyRef,
    BookRef,
    BorrowRecord,
    LibraryRef,
    ReservationRecord,
    UserRef,
)
from app.errors import DeliveryError, GatewayError
from app.extensions import db

TODAY = date(2024, 3, 15)


class FakeGateway:
    """In-memory record store; every call is appended to `calls`."""

    def __init__(self, borrows=(), reservations=(), fail_on=()):
        self.borrows = list(borrows)
        self.reservations = {r.id: r for r in reservations}
        self.fail_on = set(fail_on)
        self.calls = []

    def _check(self, operation):
        if operation in self.fail_on:
            raise GatewayError(f"{operation} unavailable")

    def list_borrows(self):
        self.calls.append(("list_borrows",))
        self._check("list_borrows")
        return list(self.borrows)

    def list_reservations(self):
        self.calls.append(("list_reservations",))
        self._check("list_reservations")
        return list(self.reservations.values())

    def update_reservation(self, reservation_id, record):
        self.calls.append(("update", reservation_id))
        self._check("update_reservation")
        self.reservations[reservation_id] = record

    def delete_reservation(self, reservation_id):
        self.calls.append(("delete", reservation_id))
        self._check("delete_reservation")
        self.reservations.pop(reservation_id, None)


class RecordingNotifier:
    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.attempts = []

    def send(self, to, subject, body):
        self.attempts.append((to, subject, body))
        if to in self.fail_for:
            raise DeliveryError(to, "smtp unavailable")

    @property
    def delivered(self):
        return [a for a in self.attempts if a[0] not in self.fail_for]


def make_borrow(id=1, due_date=TODAY, returned=False, email="reader@example.com",
                title="Germinal", library="Lyon"):
    return BorrowRecord(
        id=id,
        book=BookRef(title=title) if title else None,
        library=LibraryRef(name=library) if library else None,
        user=UserRef(email=email) if email else None,
        due_date=due_date,
        returned=returned,
    )


def make_reservation(id=1, position=1, notification_sent=False, availability_date=None,
                     email="reader@example.com", title="Germinal", library="Lyon"):
    copy = None
    if title and library:
        copy = AvailableCopyRef(book=BookRef(title=title), library=LibraryRef(name=library))
    return ReservationRecord(
        id=id,
        position=position,
        available_copy=copy,
        user=UserRef(email=email) if email else None,
        notification_sent=notification_sent,
        availability_date=availability_date,
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def app():
    app = create_app(TestConfig)
    app.extensions["batch_clock"] = lambda: TODAY
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def notifier():
    return RecordingNotifier()
