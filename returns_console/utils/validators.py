# utils/validators.py
from numbers import Integral, Real


def non_empty(text) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)

    Booleans are rejected; True is not a price.
    """
    if isinstance(x, bool) or x is None:
        return False, None
    try:
        return True, float(x)
    except (TypeError, ValueError):
        return False, None


def try_parse_int(x):
    """
    Best-effort parse to int, truncating like a quantity box does ("2.7" -> 2).

    Returns:
        (ok: bool, value: int|None)
    """
    ok, val = try_parse_float(x)
    if not ok or val != val or val in (float("inf"), float("-inf")):
        return False, None
    return True, int(val)


def coerce_id(x):
    """
    Normalize an identifier so 9, 9.0 and "9" compare equal.

    Integral-looking values become int; other non-empty strings are kept
    stripped; anything else (None, "", bools, containers) yields None.
    """
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, Integral):
        return int(x)
    if isinstance(x, Real):
        return int(x) if float(x).is_integer() else None
    if isinstance(x, str):
        s = x.strip()
        if not s:
            return None
        try:
            return int(s)
        except ValueError:
            return s
    return None

