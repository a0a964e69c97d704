from __future__ import annotations

import math
import re
from typing import Any, Optional

# <flag>Y<mantissa>e<exponent>]  (pgf floating point unit representation)
_FPU_RE = re.compile(r"^([0-5])Y([0-9]*\.?[0-9]+)e([+-]?[0-9]+)\]$")

_FPU_ZERO = "0Y0.0e0]"
_FPU_NAN = "3Y0.0e0]"
_FPU_POS_INF = "4Y0.0e0]"
_FPU_NEG_INF = "5Y0.0e0]"


def string_or_default(value: Any, default: Any = None) -> Any:
    """Return ``default`` for ``None`` and blank strings, ``value`` otherwise."""

    if value is None:
        return default
    if isinstance(value, str) and not value.strip():
        return default
    return value


def _parse_fpu(text: str) -> Optional[float]:
    match = _FPU_RE.match(text)
    if not match:
        return None
    flag, mantissa, exponent = match.groups()
    if flag == "0":
        return 0.0
    if flag == "3":
        return math.nan
    if flag == "4":
        return math.inf
    if flag == "5":
        return -math.inf
    magnitude = float(f"{mantissa}e{exponent}")
    return magnitude if flag == "1" else -magnitude


def parse_number(value: Any) -> Optional[float]:
    """Convert a raw coordinate or meta field to ``float``.

    Returns ``None`` when the field is absent or cannot be read as a number.
    Infinite and NaN values are returned as such; deciding what to do with
    them is up to the caller.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        fpu = _parse_fpu(cleaned)
        if fpu is not None:
            return fpu
        try:
            return float(cleaned)
        except ValueError:
            return None
    if hasattr(value, "__float__"):
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    return None


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def to_tex_string(value: Any) -> str:
    """Serialize ``value`` in the host's canonical number format.

    ``None`` becomes the empty string; symbolic (textual) values are passed
    through unchanged.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    number = float(value)
    if math.isnan(number):
        return _FPU_NAN
    if math.isinf(number):
        return _FPU_POS_INF if number > 0 else _FPU_NEG_INF
    if number == 0.0:
        return _FPU_ZERO
    flag = "1" if number > 0 else "2"
    mantissa, exponent = f"{abs(number):.10e}".split("e")
    mantissa = mantissa.rstrip("0")
    if mantissa.endswith("."):
        mantissa += "0"
    return f"{flag}Y{mantissa}e{int(exponent)}]"


def string_or_placeholder(value: Any, placeholder: str = "--") -> str:
    if value is None:
        return placeholder
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
