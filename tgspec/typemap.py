"""Mapping of Go type names onto OpenAPI schema types and references."""

from __future__ import annotations

import unicodedata

from tgspec.schema import Schema

SCHEMA_PREFIX = "#/components/schemas/"

_NUMBER_FORMATS = frozenset(
    {"int", "int32", "int64", "uint", "uint8", "uint16", "uint32", "uint64"}
)

_FIXED_CASTS: dict[str, tuple[str, str]] = {
    "bool": ("boolean", ""),
    "Interface": ("object", ""),
    "json.RawMessage": ("object", ""),
    "time.Time": ("string", "date-time"),
    "sql.NullTime": ("string", "date-time"),
    "byte": ("number", "uint8"),
    "[]byte": ("string", "byte"),
    "fiber.Cookie": ("string", ""),
    "snowflake.ID": ("string", ""),
    "JSON": ("string", "byte"),
    "float32": ("number", "float"),
    "float64": ("number", "float"),
    "time.Duration": ("number", "int64"),
}


def cast_type(origin_name: str) -> tuple[str, str]:
    """OpenAPI ``(type, format)`` for a Go type name.

    Names without a known mapping come back unchanged with an empty format.
    """
    if origin_name in _FIXED_CASTS:
        type_name, fmt = _FIXED_CASTS[origin_name]
    elif origin_name in _NUMBER_FORMATS:
        type_name, fmt = "number", origin_name
    else:
        type_name, fmt = origin_name, ""
    if "[" not in origin_name and origin_name.endswith("Decimal"):
        type_name = "string"
    if "[" not in origin_name and origin_name.endswith("UUID"):
        type_name, fmt = "string", "uuid"
    return type_name, fmt


def _base_name(path: str) -> str:
    if not path:
        return "."
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/"
    return trimmed.rsplit("/", 1)[-1]


def normalize_type_name(type_name: str, pkg_path: str) -> str:
    """Drop a leading pointer mark and qualify bare names with the package name."""
    type_name = type_name.removeprefix("*")
    if "." not in type_name:
        type_name = f"{_base_name(pkg_path)}.{type_name}"
    return type_name


def schema_ref(type_name: str) -> Schema:
    """Reference to a component schema; pointer names become nullable references."""
    ref = SCHEMA_PREFIX + type_name
    if type_name.startswith("*"):
        return Schema(one_of=[Schema(ref=ref), Schema(nullable=True)])
    return Schema(ref=ref)


def is_lower_start(text: str) -> bool:
    """True when ``text`` begins with a lower-case letter."""
    if not text:
        return False
    return unicodedata.category(text[0]) == "Ll"