"""Number and file-name formatting shared by the preset converters.

Third-party EQ apps parse these files verbatim, so numbers are rendered the
way the historical exports rendered them rather than with Python's defaults.
"""
from __future__ import annotations

import json
import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
DEFAULT_FILE_STEM = "EQ Profile"
# Magnitudes from here on are written in exponent form by both toFixed and JSON
_EXPONENT_THRESHOLD = 1e21


def _exponent_text(value: float) -> str:
    """``1e+21`` / ``1.5e-7`` style text for values Python already writes with an exponent."""
    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with ties rounded away from zero on the exact binary value.

    >>> to_fixed(0.25, 1)
    '0.3'
    >>> to_fixed(-0.04, 1)
    '-0.0'
    >>> to_fixed(1e30, 4)
    '1e+30'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= _EXPONENT_THRESHOLD:
        return _exponent_text(value)
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # below 1e21 there are at most 21 integer digits
        ctx.prec = 22 + digits
        return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def round_half_up(value: float) -> int:
    """Nearest integer, ties towards positive infinity."""
    return int(math.floor(value + 0.5))


def js_number(value: float) -> str:
    """Shortest round-trip text for a number, laid out like ``JSON.stringify``.

    >>> js_number(1000.0)
    '1000'
    >>> js_number(0.00001)
    '0.00001'
    >>> js_number(1e-7)
    '1e-7'
    """
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < _EXPONENT_THRESHOLD:
        return format(Decimal(text), "f")
    return _exponent_text(value)


def _encode(value: Any, level: int) -> str:
    if isinstance(value, dict):
        if not value:
            return "{}"
        pad = "  " * (level + 1)
        items = [f"{pad}{json.dumps(str(k), ensure_ascii=False)}: {_encode(v, level + 1)}" for k, v in value.items()]
        return "{\n" + ",\n".join(items) + "\n" + "  " * level + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        pad = "  " * (level + 1)
        items = [pad + _encode(v, level + 1) for v in value]
        return "[\n" + ",\n".join(items) + "\n" + "  " * level + "]"
    if value is None or isinstance(value, (bool, str)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return js_number(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_json(data: Any) -> str:
    """Two-space indented JSON with numbers written the way JavaScript writes them."""
    return _encode(data, 0)


def safe_file_stem(profile_name: str) -> str:
    """Replace characters that common file systems reject."""
    stem = _UNSAFE_CHARS.sub("_", profile_name).strip().rstrip(". ")
    return stem or DEFAULT_FILE_STEM


def export_file_name(profile_name: str, label: str, extension: str) -> str:
    return f"{safe_file_stem(profile_name)} - {label}{extension}"
