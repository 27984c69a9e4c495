import smtplib

import pytest

from app.errors import DeliveryError
from app.extensions import mail
from app.services.mail_service import MailNotifier


def test_send_hands_message_to_flask_mail(app):
    with mail.record_messages() as outbox:
        MailNotifier().send("reader@example.com", "Sujet", "Corps du message")

    assert len(outbox) == 1
    msg = outbox[0]
    assert msg.recipients == ["reader@example.com"]
    assert msg.subject == "Sujet"
    assert msg.body == "Corps du message"
    assert msg.sender == app.config["MAIL_DEFAULT_SENDER"]


def test_transport_failure_raises_delivery_error(app, monkeypatch):
    def boom(_msg):
        raise smtplib.SMTPServerDisconnected("connection lost")

    monkeypatch.setattr(mail, "send", boom)

    with pytest.raises(DeliveryError) as exc:
        MailNotifier().send("reader@example.com", "Sujet", "Corps")
    assert exc.value.recipient == "reader@example.com"
    assert "connection lost" in str(exc.value)


def test_missing_recipient_raises_delivery_error(app):
    with mail.record_messages() as outbox:
        with pytest.raises(DeliveryError):
            MailNotifier().send("", "Sujet", "Corps")
    assert outbox == []
