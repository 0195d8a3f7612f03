"""Identifier case conversion helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable

_NUMBER_SEQUENCE = re.compile(r"([a-zA-Z])([0-9]+)([a-zA-Z]?)")
_SEPARATORS = frozenset("_ -")


def _add_word_boundaries_to_numbers(text: str) -> str:
    return _NUMBER_SEQUENCE.sub(r"\1 \2 \3", text)


def _camel(text: str, capitalize_first: bool) -> str:
    text = _add_word_boundaries_to_numbers(text).strip(" ")
    out: list[str] = []
    capitalize = capitalize_first
    for char in text:
        if "A" <= char <= "Z" or "0" <= char <= "9":
            out.append(char)
        elif "a" <= char <= "z":
            out.append(char.upper() if capitalize else char)
        capitalize = char in _SEPARATORS
    return "".join(out)


def to_camel(text: str) -> str:
    """Convert ``text`` to CamelCase."""
    return _camel(text, True)


def to_lower_camel(text: str) -> str:
    """Convert ``text`` to lowerCamelCase; strings without lower-case letters are kept."""
    if not any("a" <= char <= "z" for char in text):
        return text
    if "A" <= text[0] <= "Z":
        text = text[0].lower() + text[1:]
    return _camel(text, False)


def index_map(values: Iterable[str]) -> dict[str, int]:
    """Map each value to the index of its last occurrence."""
    return {value: index for index, value in enumerate(values)}