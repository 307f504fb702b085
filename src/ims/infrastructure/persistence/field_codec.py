"""Field escaping for the delimiter-separated flat files.

One record per line, fields separated by ``;``.  Inside a field the
backslash escapes the delimiter, itself, newline and carriage return:

    \\  ->  \\\\      ;  ->  \\;      LF  ->  \\n      CR  ->  \\r

``split_fields(join_fields(fields)) == fields`` for every list of
strings.  The delimiter is a parameter so the same rules encode nested
lists inside a single field (bundle components use ``|``).
"""

from __future__ import annotations

from collections.abc import Iterable

DELIMITER = ";"
ESCAPE = "\\"

_ENCODE = {ESCAPE: ESCAPE + ESCAPE, "\n": ESCAPE + "n", "\r": ESCAPE + "r"}
_DECODE = {"n": "\n", "r": "\r"}


def escape(value: str, delimiter: str = DELIMITER) -> str:
    out = []
    for ch in value:
        if ch == delimiter:
            out.append(ESCAPE + ch)
        else:
            out.append(_ENCODE.get(ch, ch))
    return "".join(out)


def unescape(value: str) -> str:
    out = []
    pending = False
    for ch in value:
        if pending:
            out.append(_DECODE.get(ch, ch))
            pending = False
        elif ch == ESCAPE:
            pending = True
        else:
            out.append(ch)
    if pending:
        out.append(ESCAPE)
    return "".join(out)


def split_fields(line: str, delimiter: str = DELIMITER) -> list[str]:
    """Split one line on unescaped delimiters and unescape every field."""
    fields: list[str] = []
    current: list[str] = []
    pending = False
    for ch in line:
        if pending:
            current.append(_DECODE.get(ch, ch))
            pending = False
        elif ch == ESCAPE:
            pending = True
        elif ch == delimiter:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    if pending:
        current.append(ESCAPE)
    fields.append("".join(current))
    return fields


def join_fields(fields: Iterable[str], delimiter: str = DELIMITER) -> str:
    return delimiter.join(escape(f, delimiter) for f in fields)
