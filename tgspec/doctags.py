"""Documentation tags: ``@tg`` annotations collected from comments."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable

from tgspec.naming import index_map
from tgspec.scanner import TagScanError, scan_tags

MARK = "@tg"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _split(text: str, separator: str) -> list[str]:
    if separator == "":
        return list(text)
    return text.split(separator)


class DocTags(dict):
    """Mapping of tag names to their string values."""

    def merge(self, other: dict[str, str]) -> DocTags:
        """Copy every tag of ``other`` into this one and return ``self``."""
        self.update(other)
        return self

    def is_set(self, name: str) -> bool:
        return name in self

    def contains(self, word: str) -> bool:
        """True when any tag name contains ``word``."""
        return any(word in key for key in self)

    def to_docs(self) -> list[str]:
        """Render the tags back as comment lines."""
        return [f"// {MARK} {key}=`{value}`" for key, value in self.items()]

    def sub(self, prefix: str) -> DocTags:
        """Tags under ``prefix.``, with that prefix removed from their names."""
        prefix += "."
        return DocTags(
            (key[len(prefix):], value) for key, value in self.items() if key.startswith(prefix)
        )

    def set(self, name: str, *args: str) -> None:
        self[name] = ",".join(args)

    def value(self, name: str, *args: str) -> str:
        """The tag's value, or the given defaults joined by spaces."""
        if name in self:
            return self[name]
        return " ".join(args)

    def value_int(self, name: str, default: int = 0) -> int:
        text = self.get(name)
        if text is not None and _INT_PATTERN.fullmatch(text):
            number = int(text)
            if _INT_MIN <= number <= _INT_MAX:
                return number
        return default

    def value_bool(self, name: str, default: bool = False) -> bool:
        text = self.get(name)
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        return default

    def to_keys(self, name: str, separator: str, *args: str) -> dict[str, int]:
        """Map each part of the split value to its last position."""
        return index_map(_split(self.value(name, *args), separator))

    def to_map(self, name: str, separator: str, splitter: str, *args: str) -> dict[str, str]:
        """Parse the value as ``key<splitter>value`` pairs joined by ``separator``."""
        result: dict[str, str] = {}
        for pair in _split(self.value(name, *args), separator):
            parts = _split(pair, splitter)
            if len(parts) == 2:
                result[parts[0]] = parts[1]
        return result

    def to_json(self) -> str:
        """JSON text of the tags; ``null`` when there are none."""
        if not self:
            return "null"
        text = json.dumps(dict(sorted(self.items())), ensure_ascii=False, separators=(",", ":"))
        for char, escape in _JSON_ESCAPES.items():
            text = text.replace(char, escape)
        return text


def parse_tags(docs: Iterable[str]) -> DocTags:
    """Collect ``@tg`` tags from comment lines; repeated names are joined by commas."""
    tags = DocTags()
    for doc in docs:
        line = doc.removeprefix("//").strip()
        if not line.startswith(MARK):
            continue
        try:
            values = scan_tags(line[len(MARK):])
        except TagScanError as error:
            values = error.tags
        for key, value in values.items():
            if key in tags:
                tags[key] += "," + value
            else:
                tags[key] = value
    return tags