from __future__ import annotations


class BatchError(Exception):
    """Base class for errors raised by the lending batch."""


class GatewayError(BatchError):
    """The record store could not be read or written.

    Fatal to the run that hit it: the run stops and the next scheduled
    invocation starts again from a fresh fetch.
    """


class DeliveryError(BatchError):
    """A notification could not be handed to the mail transport."""

    def __init__(self, recipient: str | None, message: str):
        super().__init__(f"delivery to {recipient or '-'} failed: {message}")
        self.recipient = recipient


class InvalidRecordError(BatchError):
    """A record is missing a reference the engine needs (user, book, library)."""

    def __init__(self, record_id, message: str):
        super().__init__(f"record {record_id}: {message}")
        self.record_id = record_id
