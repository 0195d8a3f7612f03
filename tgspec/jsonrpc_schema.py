"""Schemas of JSON-RPC 2.0 envelopes."""

from __future__ import annotations

from tgspec.schema import Schema


def _id_schema() -> Schema:
    return Schema(example=1, one_of=[Schema(type="number"), Schema(type="string", format="uuid")])


def _version_schema() -> Schema:
    return Schema(type="string", example="2.0")


def jsonrpc_schema(prop_name: str, prop: Schema) -> Schema:
    """A JSON-RPC envelope carrying ``prop`` under ``prop_name``."""
    return Schema(
        type="object",
        properties={"id": _id_schema(), "jsonrpc": _version_schema(), prop_name: prop},
    )


def jsonrpc_error_schema() -> Schema:
    """A JSON-RPC error response envelope."""
    error = Schema(
        type="object",
        nullable=True,
        properties={
            "code": Schema(example=-32603, type="number", format="int32"),
            "message": Schema(type="string", example="not found"),
            "data": Schema(type="object", nullable=True),
        },
    )
    return Schema(
        type="object",
        properties={"id": _id_schema(), "jsonrpc": _version_schema(), "error": error},
    )