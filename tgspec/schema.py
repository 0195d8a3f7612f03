"""OpenAPI 3 document model and its conversion to plain data."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from typing import Any, Optional

_EMPTY = "empty"
_NIL = "nil"


def _field(key: str, omit: Optional[str] = _EMPTY, *, default: Any = MISSING,
           default_factory: Any = MISSING) -> Any:
    metadata = {"key": key, "omit": omit}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str, list, tuple, dict)):
        return not value
    return False


def _omitted(value: Any, omit: Optional[str]) -> bool:
    if omit == _EMPTY:
        return _is_empty(value)
    if omit == _NIL:
        return value is None
    return False


def to_plain(value: Any) -> Any:
    """Convert model objects into dicts, lists and scalars ready for JSON or YAML.

    Empty optional fields are left out and mapping keys come out sorted.
    """
    if is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {}
        for item in fields(value):
            current = getattr(value, item.name)
            if _omitted(current, item.metadata.get("omit")):
                continue
            result[item.metadata.get("key", item.name)] = to_plain(current)
        return result
    if isinstance(value, dict):
        return {key: to_plain(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


@dataclass
class Schema:
    """A schema object; also used for properties and array items."""

    ref: str = _field("$ref", default="")
    type: str = _field("type", default="")
    format: str = _field("format", default="")
    minimum: int = _field("minimum", default=0)
    maximum: int = _field("maximum", default=0)
    required: list[str] = _field("required", default_factory=list)
    properties: dict[str, "Schema"] = _field("properties", default_factory=dict)
    items: Optional["Schema"] = _field("items", default=None)
    enum: list[str] = _field("enum", default_factory=list)
    nullable: bool = _field("nullable", default=False)
    example: Any = _field("example", _NIL, default=None)
    description: str = _field("description", default="")
    one_of: list["Schema"] = _field("oneOf", default_factory=list)
    all_of: list["Schema"] = _field("allOf", default_factory=list)
    additional_properties: Any = _field("additionalProperties", _NIL, default=None)


@dataclass
class Contact:
    name: str = _field("name", default="")
    url: str = _field("url", default="")
    email: str = _field("email", default="")


@dataclass
class License:
    name: str = _field("name", default="")
    url: str = _field("url", default="")


@dataclass
class Info:
    title: str = _field("title", default="")
    description: str = _field("description", default="")
    terms_of_service: str = _field("termsOfService", default="")
    contact: Optional[Contact] = _field("contact", default=None)
    license: Optional[License] = _field("license", default=None)
    version: str = _field("version", default="")


@dataclass
class ExternalDocs:
    description: str = _field("description", default="")
    url: str = _field("url", default="")


@dataclass
class Tag:
    name: str = _field("name", default="")
    description: str = _field("description", default="")
    external_docs: ExternalDocs = _field("externalDocs", default_factory=ExternalDocs)


@dataclass
class Variable:
    enum: list[str] = _field("enum", default_factory=list)
    default: str = _field("default", default="")
    description: str = _field("description", default="")


@dataclass
class Server:
    url: str = _field("url", default="")
    description: str = _field("description", default="")
    variables: dict[str, Variable] = _field("variables", default_factory=dict)


@dataclass
class CodeSample:
    lang: str = _field("lang", None, default="")
    source: str = _field("source", None, default="")


@dataclass
class Parameter:
    ref: str = _field("$ref", default="")
    in_: str = _field("in", default="")
    name: str = _field("name", default="")
    description: str = _field("description", default="")
    required: bool = _field("required", default=False)
    schema: Schema = _field("schema", default_factory=Schema)


@dataclass
class Media:
    schema: Schema = _field("schema", default_factory=Schema)


@dataclass
class Header:
    description: str = _field("description", default="")
    schema: Schema = _field("schema", default_factory=Schema)


@dataclass
class Response:
    description: str = _field("description", None, default="")
    content: Optional[dict[str, Media]] = _field("content", default_factory=dict)
    headers: Optional[dict[str, Header]] = _field("headers", default_factory=dict)


@dataclass
class RequestBody:
    description: str = _field("description", default="")
    content: Optional[dict[str, Media]] = _field("content", default_factory=dict)


@dataclass
class Operation:
    tags: list[str] = _field("tags", default_factory=list)
    summary: str = _field("summary", default="")
    description: str = _field("description", default="")
    operation_id: str = _field("operationId", default="")
    consumes: list[str] = _field("consumes", default_factory=list)
    produces: list[str] = _field("produces", default_factory=list)
    parameters: list[Parameter] = _field("parameters", default_factory=list)
    request_body: Optional[RequestBody] = _field("requestBody", default=None)
    responses: dict[str, Response] = _field("responses", default_factory=dict)
    deprecated: bool = _field("deprecated", default=False)
    servers: list[Server] = _field("servers", default_factory=list)
    code_samples: list[CodeSample] = _field("x-code-samples", default_factory=list)


_HTTP_METHODS = ("get", "post", "patch", "put", "delete")


@dataclass
class PathItem:
    ref: str = _field("$ref", default="")
    summary: str = _field("summary", default="")
    description: str = _field("description", default="")
    get: Optional[Operation] = _field("get", default=None)
    post: Optional[Operation] = _field("post", default=None)
    patch: Optional[Operation] = _field("patch", default=None)
    put: Optional[Operation] = _field("put", default=None)
    delete: Optional[Operation] = _field("delete", default=None)

    def set_operation(self, method: str, operation: Operation) -> None:
        """Attach ``operation`` under the given HTTP method (case-insensitive)."""
        name = method.lower()
        if name not in _HTTP_METHODS:
            raise ValueError(f"unsupported HTTP method {method!r}")
        setattr(self, name, operation)


@dataclass
class BearerAuth:
    type: str = _field("type", default="")
    scheme: str = _field("scheme", default="")


@dataclass
class SecuritySchemes:
    bearer_auth: BearerAuth = _field("bearerAuth", default_factory=BearerAuth)


@dataclass
class Security:
    bearer_auth: list[Any] = _field("bearerAuth", None, default_factory=list)


@dataclass
class Components:
    schemas: dict[str, Schema] = _field("schemas", default_factory=dict)
    security_schemes: Optional[SecuritySchemes] = _field("securitySchemes", default=None)


@dataclass
class Document:
    """Top-level OpenAPI document."""

    openapi: str = _field("openapi", None, default="3.0.0")
    info: Info = _field("info", default_factory=Info)
    servers: list[Server] = _field("servers", default_factory=list)
    tags: list[Tag] = _field("tags", default_factory=list)
    schemes: list[str] = _field("schemes", default_factory=list)
    paths: dict[str, PathItem] = _field("paths", None, default_factory=dict)
    components: Components = _field("components", default_factory=Components)
    security: list[Security] = _field("security", default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The document as plain nested data."""
        return to_plain(self)