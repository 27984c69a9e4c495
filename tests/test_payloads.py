import pytest

from app.domain.records import NotificationPayload
from app.errors import InvalidRecordError
from app.tasks.payloads import build_late_borrow_payload, build_reservation_ready_payload
from conftest import make_borrow, make_reservation


def test_late_borrow_payload_wording():
    b = make_borrow(id=7, email="alice@example.com", title="Les Misérables", library="Paris")

    payload = build_late_borrow_payload(b)

    assert payload == NotificationPayload(
        recipient="alice@example.com",
        subject="Date de retour dépassée du livre Les Misérables",
        body=(
            "L'emprunt du livre \"Les Misérables\" a dépassé sa date d'échéance, "
            "veuillez nous ramener le livre à la bibliothèque de Paris dans les plus brefs délais."
            "\nCordialement.\nOC-Bibliothèque."
        ),
    )


def test_reservation_ready_payload_wording():
    r = make_reservation(id=3, email="bob@example.com", title="Candide", library="Bordeaux")

    payload = build_reservation_ready_payload(r)

    assert payload.recipient == "bob@example.com"
    assert payload.subject == "Réservation du livre: Candide"
    assert payload.body == (
        "Le livre \"Candide\" que vous avez réservé est disponible à la bibliothèque de Bordeaux "
        "vous disposez de 48h pour venir le récupérer, au delà la réservation sera annulée."
        "\nCordialement.\nOC-Bibliothèque."
    )


def test_builders_do_not_touch_the_record():
    b = make_borrow()
    r = make_reservation()
    build_late_borrow_payload(b)
    build_reservation_ready_payload(r)
    assert b == make_borrow()
    assert r == make_reservation()


@pytest.mark.parametrize("missing", ["email", "title", "library"])
def test_late_borrow_missing_reference_is_invalid(missing):
    b = make_borrow(id=11, **{missing: None})
    with pytest.raises(InvalidRecordError) as exc:
        build_late_borrow_payload(b)
    assert exc.value.record_id == 11


@pytest.mark.parametrize("missing", ["email", "title"])
def test_reservation_missing_reference_is_invalid(missing):
    r = make_reservation(id=12, **{missing: None})
    with pytest.raises(InvalidRecordError):
        build_reservation_ready_payload(r)
