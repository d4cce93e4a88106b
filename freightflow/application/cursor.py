"""Opaque keyset cursors for the feed endpoints."""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime

from freightflow.domain.exceptions import ValidationError
from freightflow.utils import ensure_utc

_MAX_RECORD_ID = 2**63 - 1


def encode_cursor(created_at: datetime, record_id: int) -> str:
    """Encode the position of the last returned record as a URL-safe token."""

    position = {"t": ensure_utc(created_at).isoformat(), "id": int(record_id)}
    raw = json.dumps(position, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(token: str) -> tuple[datetime, int]:
    """Return the ``(created_at, id)`` position stored in ``token``.

    Raises :class:`ValidationError` when the token was not produced by
    :func:`encode_cursor`.
    """

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        position = json.loads(raw.decode("utf-8"))
        created_at = datetime.fromisoformat(position["t"])
        record_id = position["id"]
    except (
        binascii.Error,
        UnicodeError,
        ValueError,
        KeyError,
        TypeError,
    ):
        raise ValidationError(["cursor is malformed"]) from None

    if (
        not isinstance(record_id, int)
        or isinstance(record_id, bool)
        or not 1 <= record_id <= _MAX_RECORD_ID
    ):
        raise ValidationError(["cursor is malformed"])
    return ensure_utc(created_at), record_id


__all__ = ["decode_cursor", "encode_cursor"]
