from __future__ import annotations

import logging

REDACTED = "[redacted]"

BODY_ATTRS = ("request", "request_body", "data", "body")
PERSONAL_ATTRS = ("phone", "personal_email", "password")


class RedactPersonalDataFilter(logging.Filter):
    """
    Drop request bodies and mask contact details attached to log records.

    Profiles carry a phone number and a personal email; neither should reach
    the log pipeline even when passed through ``extra``.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for attr in BODY_ATTRS:
            if hasattr(record, attr):
                setattr(record, attr, None)
        for attr in PERSONAL_ATTRS:
            if getattr(record, attr, None):
                setattr(record, attr, REDACTED)
        return True
