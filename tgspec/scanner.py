"""Scanner for ``key=value`` tag strings found in documentation comments."""

from __future__ import annotations

from enum import Enum, auto

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "'": "'",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class TagScanError(ValueError):
    """Raised when a tag string is malformed.

    ``tags`` holds everything that was scanned successfully.
    """

    def __init__(self, message: str, tags: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.tags: dict[str, str] = dict(tags or {})


class _State(Enum):
    GARBAGE = auto()
    KEY = auto()
    EQUAL = auto()
    PLAIN_VALUE = auto()
    QUOTED_VALUE = auto()


def _is_word_char(char: str) -> bool:
    return char > " " and char not in "`="


def scan_tags(text: str) -> dict[str, str]:
    """Split ``text`` into a mapping of tag names to values.

    Bare words map to an empty string; values may be plain words or
    enclosed in backticks. Raises :class:`TagScanError` on malformed input.
    """
    tags: dict[str, str] = {}
    errors: list[str] = []
    size = len(text)
    pos = start = 0
    key = ""
    escaped = False
    state = _State.GARBAGE

    while True:
        if state is _State.GARBAGE:
            if pos >= size:
                break
            if _is_word_char(text[pos]):
                start = pos
                state = _State.KEY
            pos += 1

        elif state is _State.KEY:
            if pos >= size:
                tags[text[start:pos]] = ""
                break
            char = text[pos]
            if _is_word_char(char):
                pos += 1
            elif char == "=":
                key = text[start:pos]
                pos += 1
                state = _State.EQUAL
            else:
                key = text[start:pos]
                pos += 1
                tags[key] = ""
                state = _State.GARBAGE

        elif state is _State.EQUAL:
            if pos >= size:
                tags[key] = ""
                break
            char = text[pos]
            if _is_word_char(char):
                start = pos
                pos += 1
                state = _State.PLAIN_VALUE
            elif char == "`":
                start = pos
                pos += 1
                escaped = False
                state = _State.QUOTED_VALUE
            else:
                tags[key] = ""
                pos += 1
                state = _State.GARBAGE

        elif state is _State.PLAIN_VALUE:
            if pos >= size:
                tags[key] = text[start:pos]
                break
            if _is_word_char(text[pos]):
                pos += 1
            else:
                tags[key] = text[start:pos]
                pos += 1
                state = _State.GARBAGE

        else:
            if pos >= size:
                errors.append("unterminated string")
                break
            char = text[pos]
            if char == "\\":
                pos += 2
                escaped = True
            elif char == "`":
                pos += 1
                raw = text[start:pos]
                if escaped:
                    try:
                        tags[key] = unquote(raw)
                    except ValueError:
                        errors.append('error unquoting bytes ""')
                else:
                    tags[key] = raw[1:-1]
                state = _State.GARBAGE
            else:
                pos += 1

    if errors:
        raise TagScanError(errors[0], tags)
    return tags


def _read_u4(text: str, pos: int) -> int:
    chunk = text[pos:pos + 6]
    if len(chunk) < 6 or chunk[:2] != "\\u" or not all(ch in _HEX_DIGITS for ch in chunk[2:]):
        return -1
    return int(chunk[2:], 16)


def unquote(data: str) -> str:
    """Decode a double-quoted, JSON-style escaped string.

    Raises :class:`ValueError` when ``data`` is not a valid quoted string.
    """
    if len(data) < 2 or data[0] != '"' or data[-1] != '"':
        raise ValueError(f"not a quoted string: {data!r}")
    body = data[1:-1]
    out: list[str] = []
    pos = 0
    while pos < len(body):
        char = body[pos]
        if char == "\\":
            pos += 1
            if pos >= len(body):
                raise ValueError("truncated escape sequence")
            kind = body[pos]
            if kind in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[kind])
                pos += 1
            elif kind == "u":
                pos -= 1
                code = _read_u4(body, pos)
                if code < 0:
                    raise ValueError("invalid unicode escape")
                pos += 6
                if 0xD800 <= code < 0xE000:
                    low = _read_u4(body, pos)
                    if 0xD800 <= code < 0xDC00 and 0xDC00 <= low < 0xE000:
                        out.append(chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)))
                        pos += 6
                        continue
                    code = 0xFFFD
                out.append(chr(code))
            else:
                raise ValueError(f"invalid escape character {kind!r}")
        elif char == '"' or char < " ":
            raise ValueError(f"invalid character {char!r} in quoted string")
        else:
            out.append(char)
            pos += 1
    return "".join(out)