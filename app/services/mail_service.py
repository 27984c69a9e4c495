# app/services/mail_service.py
from __future__ import annotations

from typing import Protocol

from flask import current_app
from flask_mail import Message

from app.errors import DeliveryError
from app.extensions import mail


class Notifier(Protocol):
    def send(self, to: str, subject: str, body: str) -> None: ...


class MailNotifier:
    """
    Notifier over Flask-Mail.
    send() either hands the message to the transport or raises DeliveryError;
    it never retries, the caller decides what a failed delivery means.
    """

    def send(self, to: str, subject: str, body: str) -> None:
        if not to:
            raise DeliveryError(to, "no recipient address")

        try:
            msg = Message(subject=subject, recipients=[to], body=body)
            mail.send(msg)
        except Exception as e:
            current_app.logger.warning(f"[MailNotifier] Mail could not be sent to {to}: {e}")
            raise DeliveryError(to, str(e)) from e
