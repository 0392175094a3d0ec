# utils/helpers.py
from datetime import date
import logging
from typing import Any, Mapping, Optional, Union

from ..config import CURRENCY, MONEY_DECIMALS

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def today_str() -> str:
    """Return today's date as ISO string (YYYY-MM-DD)."""
    return date.today().isoformat()


def fmt_money(
    v: NumberLike,
    places: int = MONEY_DECIMALS,
    *,
    currency: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    This is the only place refund amounts get rounded; calculations keep full
    precision and hand the raw float here for display.

    Args:
        v: Value to format; will be parsed with float(v).
        places: Number of decimal places (default: MONEY_DECIMALS).
        currency: If True, append the configured currency code.
        sentinel: If not None and parsing fails, return this string
                  instead of str(v).
    """
    try:
        x = float(v)
    except (TypeError, ValueError) as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        return str(sentinel) if sentinel is not None else str(v)
    text = f"{x:,.{places}f}"
    return f"{text} {CURRENCY}" if currency else text


def first_key(d: Mapping[str, Any], *keys, default=None):
    """First non-None value among `keys` in `d`, else `default`."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default
