"""
Minutely two-factor code generation.

Codes are derived from the local time in a fixed timezone truncated to the
minute, so every caller sharing the algorithm produces the same code within
the same minute.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


DEFAULT_TIMEZONE = "America/Santiago"
MIN_LENGTH = 4
MAX_LENGTH = 8

MULTIPLIER = 97
ADDEND = 31


def minute_stamp(now: datetime, timezone: str = DEFAULT_TIMEZONE) -> int:
    """
    Render a datetime as the integer yyyyMMddHHmm in the given timezone.

    Naive datetimes are taken as already local to ``timezone``.

    Examples:
        >>> minute_stamp(datetime(2024, 1, 15, 11, 30, 59))
        202401151130
    """
    if now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(timezone))
    return int(now.strftime("%Y%m%d%H%M"))


def generate_minutely_two_factor(
    length: int = MIN_LENGTH,
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """
    Generate a numeric code that changes once per minute.

    The minute stamp is mixed as ``stamp * 97 + 31`` and the last ``length``
    digits are returned, left-padded with zeros if the result is shorter.

    Args:
        length: Number of digits, between 4 and 8
        now: Instant to generate the code for (defaults to current time)
        timezone: IANA timezone the minute stamp is taken in

    Returns:
        Code of exactly ``length`` digits

    Raises:
        ValueError: If length is outside 4..8

    Examples:
        >>> generate_minutely_two_factor(4, now=datetime(2024, 1, 15, 11, 30))
        '9641'
    """
    if length < MIN_LENGTH or length > MAX_LENGTH:
        raise ValueError(f"Length must be between {MIN_LENGTH} and {MAX_LENGTH}.")

    if now is None:
        now = datetime.now(ZoneInfo(timezone))

    mixed = str(minute_stamp(now, timezone) * MULTIPLIER + ADDEND)

    if len(mixed) < length:
        return mixed.zfill(length)
    return mixed[-length:]
