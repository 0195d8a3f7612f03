"""Doc-comment tags, naming helpers, Go module lookup and OpenAPI document building."""

__version__ = "0.1.0"

__all__ = [
    "doctags",
    "gomod",
    "jsonrpc_schema",
    "logformat",
    "naming",
    "openapi",
    "pkgpath",
    "scanner",
    "schema",
    "status",
    "typemap",
]