"""Building and writing OpenAPI documents from document-level tags."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from typing import Any, Optional

import yaml

from tgspec.doctags import DocTags
from tgspec.schema import (
    BearerAuth,
    Document,
    Media,
    Security,
    SecuritySchemes,
    Server,
)

CONTENT_JSON = "application/json"
BEARER_SECURITY_SCHEMA = "bearer"

TAG_TITLE = "title"
TAG_APP_VERSION = "version"
TAG_DESC = "desc"
TAG_SECURITY = "security"
TAG_SERVERS = "servers"

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _go_list(values: list[str]) -> str:
    return "[" + " ".join(values) + "]"


def split_interfaces(ifaces: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split interface names into included and ``!``-prefixed excluded ones.

    Raises :class:`ValueError` when both kinds are given.
    """
    include: list[str] = []
    exclude: list[str] = []
    for iface in ifaces:
        if iface.startswith("!"):
            exclude.append(iface[1:])
        else:
            include.append(iface)
    if include and exclude:
        raise ValueError(
            "include and exclude cannot be set at same time "
            f"({_go_list(include)} | {_go_list(exclude)})"
        )
    return include, exclude


def clear_content(content: Optional[dict[str, Media]]) -> Optional[dict[str, Media]]:
    """``None`` for empty content, otherwise the content itself."""
    if not content:
        return None
    return content


def new_document(tags: DocTags) -> Document:
    """A document with info, security and servers taken from ``tags``."""
    document = Document()
    document.info.title = tags.value(TAG_TITLE)
    document.info.version = tags.value(TAG_APP_VERSION)
    document.info.description = tags.value(TAG_DESC)
    if tags.is_set(TAG_SECURITY):
        for security in tags.value(TAG_SECURITY).split("|"):
            if security.casefold() == BEARER_SECURITY_SCHEMA:
                document.security.append(Security(bearer_auth=[]))
                document.components.security_schemes = SecuritySchemes(
                    bearer_auth=BearerAuth(type="http", scheme=security)
                )
    for entry in tags.value(TAG_SERVERS).split("|"):
        url, *rest = entry.split(";")
        document.servers.append(Server(url=url, description=rest[0] if rest else ""))
    return document


def _render_json(data: Any) -> str:
    text = json.dumps(data, indent=4, ensure_ascii=False)
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text.replace("\n", "\n ")


def _render_yaml(data: Any) -> str:
    return yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        indent=4,
    )


def dump_document(document: Document, out_path: str) -> None:
    """Write ``document`` to ``out_path``: JSON for ``.json`` files, YAML otherwise."""
    directory = os.path.dirname(out_path) or "."
    os.makedirs(directory, exist_ok=True)
    data = document.to_dict()
    if os.path.splitext(out_path)[1].lower() == ".json":
        text = _render_json(data)
    else:
        text = _render_yaml(data)
    descriptor = os.open(out_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
        handle.write(text)