import hmac
import math
from typing import Any, Union

Number = Union[int, float]


# ----------------------------
# Helpers
# ----------------------------
def ct_equal(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode(), b.encode())


def to_number(value: Any) -> Number:
    """Coerce a loosely typed JSON value to a finite number, 0 on garbage."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        f = value
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return 0
        try:
            f = float(s)
        except ValueError:
            return 0
    else:
        return 0
    if not math.isfinite(f):
        return 0
    return int(f) if f.is_integer() else f


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_idr(amount: Any) -> str:
    # Rp 1.250.000 (id-ID grouping, no minor units)
    n = to_number(amount)
    return "Rp " + f"{n:,.0f}".replace(",", ".")


def format_count(value: Any) -> str:
    return f"{to_number(value):,.0f}".replace(",", ".")
