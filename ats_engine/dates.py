"""Date normalization for "date posted" style fields.

Providers send publication dates as ``YYYY-MM-DD``, RFC-3339 timestamps, or
Unix epochs in seconds *or* milliseconds (often without saying which). A
missing post date must never block building the rest of a record, so every
failure here is logged and returns ``None``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"^\d+$")

# far beyond any real epoch in seconds or milliseconds
MAX_EPOCH_DIGITS = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _from_epoch(value: int, now: datetime) -> Optional[datetime]:
    """Interpret ``value`` as seconds; fall back to milliseconds if that lands in the future."""
    for divisor in (1, 1000):
        try:
            instant = datetime.fromtimestamp(value / divisor, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            continue
        if instant <= now:
            return instant
    logger.warning("Epoch value %r is in the future as both seconds and milliseconds", value)
    return None


def _from_string(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unable to parse date value %r", value)
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def normalize_date(value: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """Normalize a raw date value to a timezone-aware UTC datetime.

    Args:
        value: A date string, or an integer epoch (seconds or milliseconds).
            Digit-only strings count as epochs.
        now: Reference "current time" for the future-instant check. Defaults
            to the real current time.

    Returns:
        The UTC instant, or None when the value can't be understood.
    """
    if now is None:
        now = _utcnow()

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, float):
        if not value.is_integer():
            logger.warning("Non-integral epoch value %r", value)
            return None
        value = int(value)

    if isinstance(value, int):
        return _from_epoch(value, now)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _DIGITS_RE.match(value):
            if len(value) > MAX_EPOCH_DIGITS:
                logger.warning("Epoch value has too many digits: %r...", value[:MAX_EPOCH_DIGITS])
                return None
            return _from_epoch(int(value), now)
        return _from_string(value)

    logger.warning("Unsupported date value type %s", type(value).__name__)
    return None
