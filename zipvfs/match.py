"""Shell-style path matching where wildcards never cross a separator.

Unlike fnmatch, ``*`` only matches within one path segment, so
``match("*", "dir/b.txt")`` is False and ``match("dir/*", "dir/b.txt")``
is True. The supported syntax is:

    *        any run of non-separator characters
    ?        any single non-separator character
    [...]    character class, with ranges (a-z) and negation ([^...] or [!...])
    \\c      the literal character c

Inside a class ``-`` and ``]`` are literal only when escaped, so ``[]a]``,
``[-a]`` and ``[a-]`` are malformed; write ``[\\]a]`` or ``[\\-a]`` instead.

Malformed patterns raise MalformedPatternError whatever name they are
tested against.
"""

from __future__ import annotations

import functools
import re

from .errors import MalformedPatternError

SEP = "/"


def match(pattern: str, name: str) -> bool:
    """Report whether ``name`` matches the shell ``pattern``."""
    return _compile(pattern).fullmatch(name) is not None


def validate(pattern: str) -> None:
    """Raise MalformedPatternError if ``pattern`` is not well formed."""
    _compile(pattern)


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(_translate(pattern), re.DOTALL)


def _translate(pattern: str) -> str:
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            # "**" is the same as "*"
            while i < n and pattern[i] == "*":
                i += 1
            out.append(f"[^{SEP}]*")
        elif c == "?":
            out.append(f"[^{SEP}]")
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            out.append(cls)
        elif c == "\\":
            if i >= n:
                raise MalformedPatternError(pattern, "trailing backslash")
            out.append(re.escape(pattern[i]))
            i += 1
        else:
            out.append(re.escape(c))
    return "".join(out)


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class starting after ``[`` at index ``i``."""
    n = len(pattern)
    negate = False
    if i < n and pattern[i] in "^!":
        negate = True
        i += 1

    items: list[str] = []
    while True:
        if i < n and pattern[i] == "]" and items:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        if i < n and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise MalformedPatternError(pattern, f"bad range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    body = "".join(items)
    if negate:
        return f"[^{SEP}{body}]", i
    return f"(?:(?!{SEP})[{body}])", i


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    n = len(pattern)
    if i >= n:
        raise MalformedPatternError(pattern, "unterminated character class")
    c = pattern[i]
    if c in "-]":
        # Both are only literal inside a class when escaped.
        raise MalformedPatternError(pattern, f"unescaped {c!r} in character class")
    if c == "\\":
        if i + 1 >= n:
            raise MalformedPatternError(pattern, "trailing backslash")
        return pattern[i + 1], i + 2
    return c, i + 1
