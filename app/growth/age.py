from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil.parser import isoparse

from .errors import InvalidDate


AVG_DAYS_PER_MONTH = 30.44
SECONDS_PER_DAY = 86400.0

DateLike = Union[str, date, datetime]


def parse_date(value: DateLike) -> datetime:
    """Coerce an ISO-8601 string, date or datetime into an aware UTC datetime.

    Bare dates are taken as UTC midnight. Naive datetimes are assumed UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDate("Empty date string")
        try:
            dt = isoparse(text)
        except (ValueError, OverflowError) as e:
            raise InvalidDate(f"Unparsable date {value!r}: {e}") from e
    else:
        raise InvalidDate(f"Unsupported date value of type {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def age_in_months(birth_date: DateLike, now: Optional[DateLike] = None) -> int:
    birth = parse_date(birth_date)
    ref = parse_date(now) if now is not None else datetime.now(timezone.utc)
    elapsed_s = abs((ref - birth).total_seconds())
    days = math.ceil(elapsed_s / SECONDS_PER_DAY)
    return math.floor(days / AVG_DAYS_PER_MONTH)
