"""
Formatting rules shared by the card and chart presenters.
"""

import math
import re
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Mapping, Optional

MISSING_VALUE = "--"
FILL_ALPHA = "33"

_NON_ALPHA = re.compile(r"[^a-z]")
_ONE_DECIMAL = Decimal("0.1")
# Wide enough for the largest finite float
_EXACT = Context(prec=400)


def format_metric(value: Any) -> str:
    """
    Format a metric with one decimal place.

    Rounds the exact binary value half away from zero, so 0.25 gives '0.3' while
    12.35 (stored just below the tie) gives '12.3'. Returns '--' for None, NaN,
    infinities, booleans and anything that does not convert to a float.
    Numeric strings are converted. Unlike toFixed, blank strings and booleans
    give '--' rather than '0.0' / '1.0'.
    """
    if value is None or isinstance(value, bool):
        return MISSING_VALUE
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return MISSING_VALUE
    if not math.isfinite(number):
        return MISSING_VALUE
    if number == 0:
        number = 0.0  # no '-0.0'

    rounded = Decimal(number).quantize(
        _ONE_DECIMAL, rounding=ROUND_HALF_UP, context=_EXACT
    )
    return str(rounded)


def derive_status_class(status: str) -> str:
    """Lowercase and keep only a-z: 'Thin Ice!' -> 'thinice'."""
    return _NON_ALPHA.sub("", status.lower())


def location_key(name: str, key_map: Optional[Mapping[str, str]] = None) -> str:
    """Element-id suffix for a location, falling back to the stripped name."""
    if key_map and name in key_map:
        return key_map[name]
    return derive_status_class(name)


def fill_color(color: str, alpha: str = FILL_ALPHA) -> str:
    """Series fill color: the stroke color token with an alpha suffix."""
    return f"{color}{alpha}"


def format_clock(
    moment: datetime, seconds: bool = True, tz: Optional[tzinfo] = None
) -> str:
    """
    Format a time the way the en-CA locale does: '03:07:09 p.m.'.

    Aware datetimes are converted to ``tz`` (system local time when None);
    naive datetimes are used as they are.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(tz)

    hour = moment.hour % 12 or 12
    suffix = "a.m." if moment.hour < 12 else "p.m."
    if seconds:
        return f"{hour:02d}:{moment.minute:02d}:{moment.second:02d} {suffix}"
    return f"{hour:02d}:{moment.minute:02d} {suffix}"
