"""Stay-interval matching.

Offers and stays are half-open calendar-date intervals ``[start, end)``.
An offer matches a stay only when it fully contains it.
"""

from datetime import date, datetime

from hotelsearch.logging import get_logger

logger = get_logger(__name__)

DateLike = date | datetime | str


def to_calendar_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to its calendar date.

    The time of day and any timezone offset are discarded, so two values on
    the same calendar day always compare equal.

    Raises:
        ValueError: if a string cannot be parsed.
        TypeError: if the value is none of the accepted types.
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    raise TypeError(f"unsupported date value: {value!r}")


def covers(
    offer_start: DateLike,
    offer_end: DateLike,
    search_start: DateLike,
    search_end: DateLike,
) -> bool:
    """Return True if the offer window ``[offer_start, offer_end)`` contains the stay.

    Empty or inverted intervals never match. Values that cannot be parsed
    reject the offer instead of raising.
    """
    try:
        o_start = to_calendar_date(offer_start)
        o_end = to_calendar_date(offer_end)
        s_start = to_calendar_date(search_start)
        s_end = to_calendar_date(search_end)
    except (TypeError, ValueError) as exc:
        logger.debug("stay_interval_unparseable", error=str(exc))
        return False

    if o_end <= o_start or s_end <= s_start:
        return False

    return o_start <= s_start and s_end <= o_end
