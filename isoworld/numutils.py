"""Integer helpers: bounded parsing, base conversion, powers, primes and colours."""

from __future__ import annotations

import math
import re
import sys
from itertools import takewhile
from typing import Iterable

INT_MIN = -2147483648
INT_MAX = 2147483647

_SIGNS = re.compile(r"[+-]*")
_SIGNED_DIGITS = re.compile(r"([+-]*)([0-9]*)")


def check_overflow(nb: int) -> int:
    """Return ``nb`` if it fits a signed 32-bit integer, otherwise 0."""
    return nb if INT_MIN <= nb <= INT_MAX else 0


def compute_power(nb: int, p: int) -> int:
    """Return ``nb`` to the power ``p``, or 0 on overflow or negative ``p``."""
    if p < 0:
        return 0
    result = 1
    for _ in range(p):
        result = check_overflow(nb * result)
    return result


def integer_sqrt(nb: int) -> int:
    """Return the exact integer square root of ``nb``, or 0 if there is none."""
    if nb <= 0:
        return 0
    root = math.isqrt(nb)
    return root if root * root == nb else 0


def is_prime(nb: int) -> bool:
    """Tell whether ``nb`` is a prime number."""
    if nb <= 1:
        return False
    return all(nb % divisor for divisor in range(2, math.isqrt(nb) + 1))


def find_prime_sup(nb: int) -> int:
    """Return the smallest prime not below ``nb``, or 0 past the 32-bit range."""
    candidate = nb
    while not is_prime(candidate):
        candidate += 1
        if candidate > INT_MAX:
            return 0
    return candidate


def parse_int(text: str) -> int:
    """Read a signed decimal integer at the start of ``text``.

    Any number of leading ``+``/``-`` signs is accepted; an odd count of
    ``-`` makes the result negative. More than ten digits, or a value
    outside the signed 32-bit range, gives 0.
    """
    match = _SIGNED_DIGITS.match(text)
    signs, digits = match.group(1), match.group(2)
    if len(digits) > 10 or not digits:
        return 0
    value = int(digits)
    if signs.count("-") % 2:
        value = -value
    return check_overflow(value)


def parse_int_base(text: str, base: str) -> int:
    """Read a signed integer written with the digit alphabet ``base``.

    Out-of-range values, and numbers written with too many digits, give 0.
    """
    if not text or not base:
        return 0
    signs = _SIGNS.match(text).group()
    negative = signs.count("-") % 2 == 1
    digits = "".join(takewhile(lambda c: c in base, text[len(signs):]))
    radix = len(base)
    value = 0
    for char in digits:
        value = value * radix + base.index(char)
    limit = -INT_MIN if negative else INT_MAX
    if value > limit:
        return 0
    if len(digits) > 32 or (not negative and len(digits) == 32):
        return 0
    return -value if negative else value


def format_int_base(number: int, base: str) -> str:
    """Write ``number`` with the digit alphabet ``base``."""
    if len(base) < 2:
        raise ValueError("a base needs at least two digits")
    sign = "-" if number < 0 else ""
    remaining = abs(number)
    radix = len(base)
    digits = []
    while True:
        remaining, digit = divmod(remaining, radix)
        digits.append(base[digit])
        if remaining == 0:
            break
    return sign + "".join(reversed(digits))


def convert_base(number: str, base_from: str, base_to: str) -> str:
    """Rewrite ``number`` from the alphabet ``base_from`` into ``base_to``."""
    return format_int_base(parse_int_base(number, base_from), base_to)


def power(nb: int, exponent: int) -> int:
    """Return ``nb`` raised to ``exponent``; non-positive exponents give 1."""
    return nb**exponent if exponent > 0 else 1


def get_color(red: int, green: int, blue: int) -> int:
    """Pack three 8-bit channels into a 0xRRGGBB integer."""
    return ((red & 0xFF) << 16) + ((green & 0xFF) << 8) + (blue & 0xFF)


def swap_endian_color(color: int) -> int:
    """Reverse the four bytes of a 32-bit colour value."""
    raw = (color & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(raw, "big", signed=True)


def sort_ints(values: Iterable[int]) -> list[int]:
    """Return the integers in ascending order."""
    return sorted(values)


def sign_letter(n: int) -> str:
    """Write ``"P"`` for a non-negative number or ``"N"`` for a negative one
    to standard output, and return the letter written."""
    letter = "P" if n >= 0 else "N"
    sys.stdout.write(letter)
    sys.stdout.flush()
    return letter