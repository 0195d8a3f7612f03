# tgspec

Building blocks for a transport generator: read `@tg` tags from doc
comments, convert identifiers between naming styles, locate Go modules and
packages on disk, and assemble OpenAPI 3.0 documents for HTTP and JSON-RPC
services.

## Installation

```
pip install tgspec
```

For running the test suite:

```
pip install "tgspec[test]"
pytest
```

## Doc-comment tags

Tags live in comment lines that start with `@tg`. Values may be bare words
or back-quoted strings; a key without a value is recorded with an empty
value.

```python
from tgspec.doctags import parse_tags

tags = parse_tags([
    "// @tg jsonRPC-server log trace",
    "// @tg title=`Example API` version=1.0.0",
    "// @tg http-success=201",
])

tags.is_set("trace")                 # True
tags.value("title")                  # "Example API"
tags.value("missing", "none")        # "none"
tags.value_int("http-success", 200)  # 201
tags.contains("server")              # True: some key contains the word
```

`DocTags` is a `dict` subclass. Repeated keys are joined with a comma.
`sub("field")` returns the tags whose keys start with `field.`, with the
prefix removed; `to_docs()` turns a tag set back into comment lines;
`value_bool`, `to_keys` and `to_map` read values in other shapes; `merge`
copies another tag set in; `to_json()` gives compact JSON, or `null` for an
empty set.

The low-level scanner is available on its own:

```python
from tgspec.scanner import scan_tags, unquote, TagScanError

scan_tags("a=1 b=`two words` c")   # {"a": "1", "b": "two words", "c": ""}
unquote('"a\\tb"')                 # "a\tb"
```

An unterminated back-quoted value raises `TagScanError`, whose `tags`
attribute holds what was scanned before the error.

## Naming

```python
from tgspec.naming import to_camel, to_lower_camel, index_map

to_camel("user_id")         # "UserId"
to_lower_camel("GetUser")   # "getUser"
index_map(["a", "b"])       # {"a": 0, "b": 1}
```

## Go modules

`tgspec.gomod` finds the `go.mod` that governs a directory (`find_go_mod`),
reads the module and its requirements (`parse_mod`, `get_mod_name`), escapes
module paths for the module cache (`escape_path`), and maps an import path
to a directory in the module cache (`pkg_mod_path`) or to a path inside the
local module (`trim_local_pkg`).

`tgspec.pkgpath` works out the import path of a Go file or directory:
`get_pkg_path` uses the governing `go.mod` when there is one
(`pkg_path_from_go_mod`, `module_path`) and falls back to GOPATH
(`pkg_path_from_gopath`, `default_go_path`).

Finding `go.mod` runs `go env GOMOD`, so the `go` tool must be on the `PATH`
for those lookups.

## OpenAPI documents

```python
from tgspec.doctags import parse_tags
from tgspec.openapi import new_document, dump_document

tags = parse_tags([
    "// @tg title=`Example API` version=1.0.0",
    "// @tg servers=`http://localhost:9000;local`",
    "// @tg security=bearer",
])
document = new_document(tags)
dump_document(document, "docs/openapi.yaml")   # ".json" writes JSON instead
```

`new_document` fills in the title, version, description, servers and bearer
security from the tags. `split_interfaces` separates included names from
`!`-prefixed excluded ones and refuses a mix of both; `clear_content` turns
empty content into `None`.

The dataclasses in `tgspec.schema` (`Schema`, `Operation`, `PathItem`,
`Components`, `Document` and the rest) convert to plain dictionaries through
`to_plain` or `Document.to_dict()`, with empty fields left out and mapping
keys sorted. `PathItem.set_operation("GET", operation)` attaches an
operation under an HTTP method.

`tgspec.jsonrpc_schema` supplies the JSON-RPC envelope (`jsonrpc_schema`)
and error (`jsonrpc_error_schema`) schemas. `tgspec.typemap` maps Go type
names to OpenAPI types and formats (`cast_type`), qualifies type names
(`normalize_type_name`) and builds component references (`schema_ref`).
`tgspec.status.code_to_text` gives the response description for an HTTP
status code.

## Log output

`tgspec.logformat.get_logger(name)` returns a logger that writes through
`LogFormatter`, producing lines such as

```
Jan  2 15:04:05.000 [INFO] [module:swagger] document written
```

with the level coloured and fields, passed as `extra={"fields": {...}}`,
printed in sorted order.

## What it does not do

tgspec has no command-line program and does not read Go source files. It
does not discover service interfaces, does not build component schemas from
Go structs on its own, and does not generate server or client code: the
caller assembles paths, operations and schemas with the classes above and
writes the result with `dump_document`.