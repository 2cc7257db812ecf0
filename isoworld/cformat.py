"""A small printf-style formatter with its own conversion rules.

Supported conversions: ``s d i o b x X u c p S % f`` and the ``l``/``L``/``h``
length forms of ``d i u o b x X``. Flags are ``- 0 + space #``; the field
width and the precision may be given as ``*`` to read them from the
arguments. An unknown conversion leaves the ``%`` in the output as text.
"""

from __future__ import annotations

import math
import operator
import sys
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Iterator, Optional, TextIO

from isoworld.numutils import parse_int, power

FLAGS = "-0+ #"
_DECIMAL = "0123456789"
_OCTAL = "01234567"
_BINARY = "01"
_HEX_LOWER = "0123456789abcdef"
_HEX_UPPER = "0123456789ABCDEF"


@dataclass
class _Spec:
    flags: set[str] = field(default_factory=set)
    width: int = 0
    precision: int = -1
    prefix_len: int = 0
    is_number: bool = False

    @property
    def left(self) -> bool:
        return "-" in self.flags

    @property
    def zero(self) -> bool:
        return "0" in self.flags

    @property
    def alternate(self) -> bool:
        return "#" in self.flags


def _take(supply: Iterator[Any]) -> Any:
    try:
        return next(supply)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _wrap(value: Any, bits: int, signed: bool) -> int:
    number = operator.index(value) & ((1 << bits) - 1)
    if signed and number >= 1 << (bits - 1):
        number -= 1 << bits
    return number


def _digits(magnitude: int, alphabet: str, precision: int) -> str:
    """Write a non-negative number, padded with zeros to ``precision`` digits."""
    if magnitude == 0 and precision == -1:
        return alphabet[0]
    radix = len(alphabet)
    out = []
    while magnitude or precision > 0:
        magnitude, digit = divmod(magnitude, radix)
        out.append(alphabet[digit])
        precision -= 1
    return "".join(reversed(out))


def _sign_char(negative: bool, spec: _Spec) -> str:
    if negative:
        return "-"
    if "+" in spec.flags:
        return "+"
    if " " in spec.flags:
        return " "
    return ""


def _signed_int(spec: _Spec, supply: Iterator[Any], *, bits: int) -> str:
    value = _wrap(_take(supply), bits, signed=True)
    sign = _sign_char(value < 0, spec)
    spec.is_number = True
    spec.prefix_len = len(sign)
    return sign + _digits(abs(value), _DECIMAL, spec.precision)


def _unsigned_int(
    spec: _Spec,
    supply: Iterator[Any],
    *,
    bits: int,
    alphabet: str,
    prefix: str = "",
) -> str:
    value = _wrap(_take(supply), bits, signed=False)
    spec.is_number = True
    text = _digits(value, alphabet, spec.precision)
    if prefix and spec.alternate and value != 0:
        spec.prefix_len = len(prefix)
        return prefix + text
    return text


def _pointer(spec: _Spec, supply: Iterator[Any]) -> str:
    value = _wrap(_take(supply), 64, signed=True)
    spec.is_number = True
    spec.prefix_len = 2
    return "0x" + _digits(abs(value), _HEX_LOWER, spec.precision)


def _string(spec: _Spec, supply: Iterator[Any]) -> str:
    value = _take(supply)
    if not isinstance(value, str):
        raise TypeError("%s needs a string argument")
    if spec.precision != -1 and spec.precision < len(value):
        return value[:max(spec.precision, 0)]
    return value


def _char(spec: _Spec, supply: Iterator[Any]) -> str:
    value = _take(supply)
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c needs a single character")
        return "" if value == "\0" else value
    code = _wrap(value, 8, signed=False)
    return "" if code == 0 else chr(code)


def _printable(spec: _Spec, supply: Iterator[Any]) -> str:
    value = _take(supply)
    if not isinstance(value, str):
        raise TypeError("%S needs a string argument")
    return "".join(
        c if 32 <= ord(c) <= 126 else "\\" + _digits(ord(c), _OCTAL, 3)
        for c in value
    )


def _percent(spec: _Spec, supply: Iterator[Any]) -> str:
    spec.width = 0
    return "%"


def _carry_digits(number: int, carry: bool, min_digits: int) -> str:
    out = []
    while number or min_digits > 0:
        remainder = (number + carry) % 10
        carry = carry and remainder == 0
        number //= 10
        out.append(_DECIMAL[remainder])
        min_digits -= 1
    return "".join(reversed(out))


def _float(spec: _Spec, supply: Iterator[Any]) -> str:
    value = float(_take(supply))
    if not math.isfinite(value):
        raise ValueError("cannot format a non-finite number")
    precision = min(6 if spec.precision == -1 else spec.precision, 6)
    negative = value < 0
    value = abs(value)
    spec.is_number = True
    integral = int(value)
    if precision == 0:
        round_int = int(value * 10) % 10 >= 5
        fraction = ""
    else:
        round_int = False
        scaled = int((value - integral) * power(10, precision + 1))
        fraction = "." + _carry_digits(scaled // 10, scaled % 10 >= 5, precision)
    whole = "0" if integral == 0 else _carry_digits(integral, round_int, 0)
    sign = _sign_char(negative, spec)
    spec.prefix_len = len(sign)
    spec.precision = -1
    return sign + whole + fraction


_Handler = Callable[[_Spec, Iterator[Any]], str]

_INT = partial(_signed_int, bits=32)
_LONG = partial(_signed_int, bits=64)
_UINT = partial(_unsigned_int, bits=32, alphabet=_DECIMAL)
_ULONG = partial(_unsigned_int, bits=64, alphabet=_DECIMAL)
_OCT = partial(_unsigned_int, bits=32, alphabet=_OCTAL, prefix="0")
_LOCT = partial(_unsigned_int, bits=64, alphabet=_OCTAL, prefix="0")
_BIN = partial(_unsigned_int, bits=32, alphabet=_BINARY)
_LBIN = partial(_unsigned_int, bits=64, alphabet=_BINARY)
_HEX = partial(_unsigned_int, bits=32, alphabet=_HEX_LOWER, prefix="0x")
_LHEX = partial(_unsigned_int, bits=64, alphabet=_HEX_LOWER, prefix="0x")
_HEXU = partial(_unsigned_int, bits=32, alphabet=_HEX_UPPER, prefix="0X")
_LHEXU = partial(_unsigned_int, bits=64, alphabet=_HEX_UPPER, prefix="0X")

_CONVERSIONS: list[tuple[str, _Handler]] = [
    ("s", _string),
    ("d", _INT),
    ("i", _INT),
    ("o", _OCT),
    ("b", _BIN),
    ("x", _HEX),
    ("X", _HEXU),
    ("u", _UINT),
    ("c", _char),
    ("p", _pointer),
    ("S", _printable),
    ("%", _percent),
    ("f", _float),
    *[
        (length + kind, handler)
        for length in "lL"
        for kind, handler in (
            ("d", _LONG), ("i", _LONG), ("u", _ULONG), ("o", _LOCT),
            ("b", _LBIN), ("x", _LHEX), ("X", _LHEXU),
        )
    ],
    ("hd", _INT),
    ("hi", _INT),
    ("hu", _UINT),
    ("ho", _OCT),
    ("hb", _BIN),
    ("hx", _HEX),
    ("hX", _HEXU),
]


def _justify(body: str, spec: _Spec) -> str:
    padding = spec.width - len(body)
    if spec.left:
        return body + " " * padding
    if spec.precision == -1 and spec.zero and spec.is_number:
        return body[:spec.prefix_len] + "0" * padding + body[spec.prefix_len:]
    return " " * padding + body


def _leading_digits(fmt: str, index: int) -> str:
    end = index
    while end < len(fmt) and fmt[end] in _DECIMAL:
        end += 1
    return fmt[index:end]


def _convert(fmt: str, index: int, supply: Iterator[Any]) -> Optional[tuple[int, str]]:
    """Read one conversion starting after ``%``; return its end and its text."""
    spec = _Spec()
    while index < len(fmt) and fmt[index] in FLAGS:
        spec.flags.add(fmt[index])
        index += 1
    if fmt.startswith("*", index):
        width = _wrap(_take(supply), 32, signed=True)
        if width < 0:
            spec.flags.add("-")
        spec.width = abs(width)
        index += 1
    else:
        digits = _leading_digits(fmt, index)
        if digits:
            spec.width = parse_int(digits)
            index += len(digits)
    if fmt.startswith(".*", index):
        spec.precision = _wrap(_take(supply), 32, signed=True)
        index += 2
    elif fmt.startswith(".", index):
        digits = _leading_digits(fmt, index + 1)
        spec.precision = parse_int(digits) if digits else 0
        index += 1 + len(digits)
    for key, handler in _CONVERSIONS:
        if fmt.startswith(key, index):
            body = handler(spec, supply)
            return index + len(key), _justify(body, spec)
    return None


def format(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its conversions replaced by the formatted ``args``."""
    supply = iter(args)
    out = []
    pos = 0
    while True:
        start = fmt.find("%", pos)
        if start == -1:
            out.append(fmt[pos:])
            return "".join(out)
        out.append(fmt[pos:start])
        converted = _convert(fmt, start + 1, supply)
        if converted is None:
            out.append("%")
            pos = start + 1
        else:
            pos, text = converted
            out.append(text)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> int:
    """Write the formatted text to ``stream``; return the number of characters."""
    text = format(fmt, *args)
    stream.write(text)
    return len(text)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output; return its length."""
    return fprintf(sys.stdout, fmt, *args)