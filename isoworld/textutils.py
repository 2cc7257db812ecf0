"""ASCII string predicates, comparisons, tokenizers and dump helpers."""

from __future__ import annotations

import re
import string
from collections.abc import Iterator
from typing import Optional

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_ALNUM = _LETTERS | _DIGITS
_WORD = re.compile(r"[A-Za-z0-9]+")
_ALPHA_RUN = re.compile(r"[A-Za-z]+")


def _printable(char: str) -> bool:
    return 32 <= ord(char) <= 126


def _lower(char: str) -> str:
    return char.lower() if char in _LETTERS else char


def _upper(char: str) -> str:
    return char.upper() if char in _LETTERS else char


def is_alpha(text: str) -> bool:
    """Tell whether every character is an ASCII letter (true for '')."""
    return all(c in _LETTERS for c in text)


def is_lower(text: str) -> bool:
    """Tell whether every character is an ASCII lower-case letter."""
    return all("a" <= c <= "z" for c in text)


def is_upper(text: str) -> bool:
    """Tell whether every character is an ASCII upper-case letter."""
    return all("A" <= c <= "Z" for c in text)


def is_num(text: str) -> bool:
    """Tell whether every character is an ASCII digit."""
    return all(c in _DIGITS for c in text)


def is_alphanum(text: str) -> bool:
    """Tell whether every character is an ASCII letter or digit."""
    return all(c in _ALNUM for c in text)


def is_printable(text: str) -> bool:
    """Tell whether every character lies in the printable ASCII range."""
    return all(_printable(c) for c in text)


def word_array(text: str) -> list[str]:
    """Split ``text`` into its runs of ASCII letters and digits."""
    return _WORD.findall(text)


def capitalize(text: str) -> str:
    """Upper-case the first letter of each word and lower-case the rest.

    A word starts after any character that is not an ASCII letter or digit.
    """
    result = []
    previous: Optional[str] = None
    for char in text:
        if previous is not None and previous in _ALNUM:
            result.append(_lower(char))
        else:
            result.append(_upper(char))
        previous = char
    return "".join(result)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_keys(s1: str, s2: str, key) -> int:
    for a, b in zip(s1, s2):
        ka, kb = key(a), key(b)
        if ka != kb:
            return _sign(ord(ka) - ord(kb))
    return _sign(len(s1) - len(s2))


def compare(s1: str, s2: str) -> int:
    """Compare two strings; return -1, 0 or 1."""
    return _compare_keys(s1, s2, lambda c: c)


def compare_alpha(s1: str, s2: str) -> int:
    """Compare two strings ignoring ASCII case; return -1, 0 or 1."""
    return _compare_keys(s1, s2, _lower)


def compare_n(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters; return the difference of the first
    differing character codes, or 0."""
    for i in range(max(n, 0)):
        c1 = ord(s1[i]) if i < len(s1) else 0
        c2 = ord(s2[i]) if i < len(s2) else 0
        if c1 != c2:
            return c1 - c2
        if c1 == 0:
            break
    return 0


def find(text: str, needle: str) -> int:
    """Return the index of the first occurrence of ``needle``, or -1."""
    return text.find(needle)


def tokens(text: str, delimiters: str) -> Iterator[str]:
    """Yield the non-empty pieces of ``text`` between delimiter characters."""
    current: list[str] = []
    for char in text:
        if char in delimiters:
            if current:
                yield "".join(current)
                current = []
        else:
            current.append(char)
    if current:
        yield "".join(current)


def alpha_tokens(text: str) -> Iterator[str]:
    """Yield the runs of ASCII letters in ``text``."""
    for match in _ALPHA_RUN.finditer(text):
        yield match.group()


def show_string(text: str) -> str:
    """Return ``text`` with non-printable characters written as ``\\hh``."""
    return "".join(c if _printable(c) else f"\\{ord(c):02x}" for c in text)


def show_memory(data: bytes) -> str:
    """Return a hex dump of ``data``, sixteen bytes per line."""
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        cells = [f"{b:02x}" for b in chunk] + ["  "] * (16 - len(chunk))
        hex_part = "".join(" " + cells[k] + cells[k + 1] for k in range(0, 16, 2))
        chars = "".join(chr(b) if 32 <= b <= 126 else "." for b in chunk)
        lines.append(f"{offset:08x}:{hex_part} {chars}\n")
    return "".join(lines)