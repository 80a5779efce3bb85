"""Numeral parsing and formatting shared by the translators.

Value text on the bus side is locale independent: integers may be given in
decimal, hex ("0x", "#") or octal (leading "0"), decimals may use either
"." or "," as separator.
"""

import math
from decimal import ROUND_HALF_EVEN, Decimal


def decode_int(text: str) -> int:
    """Parse a decimal, hex or octal integer numeral.

    "42" → 42, "-0x1F" → -31, "#ff" → 255, "017" → 15. Raises ValueError.
    """
    s = text.strip()
    if not s:
        raise ValueError("empty numeral")
    sign = 1
    if s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s.startswith(("0x", "0X")):
        digits, base = s[2:], 16
    elif s.startswith("#"):
        digits, base = s[1:], 16
    elif s.startswith("0") and len(s) > 1:
        digits, base = s[1:], 8
    else:
        digits, base = s, 10
    if not digits or not digits[0].isalnum() or "_" in digits:
        raise ValueError(f"invalid numeral: {text!r}")
    return sign * int(digits, base)


def parse_decimal(text: str) -> float:
    """Parse a decimal numeral, accepting "," as decimal separator."""
    s = text.strip().replace(",", ".")
    if "_" in s or not s.isascii():
        raise ValueError(f"invalid decimal: {text!r}")
    value = float(s)
    if not math.isfinite(value):
        raise ValueError(f"invalid decimal: {text!r}")
    return value


def parse_number(text: str) -> float:
    """Integer numeral first (hex/octal aware), decimal numeral otherwise."""
    try:
        return decode_int(text)
    except ValueError:
        return parse_decimal(text)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity."""
    return math.floor(value + 0.5)


def format_number(value: float, max_fraction_digits: int) -> str:
    """Render a number with at most N fraction digits and no trailing zeros.

    50.19607 → "50.2" (1 digit), 100.0 → "100".
    """
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    d = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_EVEN)
    s = format(d, "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("-0", ""):
        s = "0"
    return s
