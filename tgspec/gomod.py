"""Locating ``go.mod`` files and mapping package paths onto module directories."""

from __future__ import annotations

import json
import os
import posixpath
import subprocess

_ESCAPE_ALLOWED = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._~/"
)


def _go_clean(path: str) -> str:
    """Lexically clean a slash-separated path."""
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _go_join(*parts: str) -> str:
    """Join non-empty slash-separated parts and clean the result."""
    present = [part for part in parts if part]
    if not present:
        return ""
    return _go_clean("/".join(present))


def _go_dir(path: str) -> str:
    """Everything but the last element of a slash-separated path."""
    return _go_clean(path[: path.rfind("/") + 1])


def find_go_mod(root: str) -> str:
    """Ask the Go tool which ``go.mod`` governs ``root``.

    Missing directories are skipped by climbing towards the filesystem
    root. Returns an empty string when the directory is not in a module.
    """
    while not os.path.isdir(root):
        parent = os.path.normpath(os.path.join(root, ".."))
        if parent == root:
            raise FileNotFoundError(f"no existing directory above {root!r}")
        root = parent
    result = subprocess.run(
        ["go", "env", "GOMOD"],
        cwd=root,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def _unquote_token(token: str) -> str:
    if token.startswith('"'):
        value = json.loads(token)
        if not isinstance(value, str):
            raise ValueError(f"invalid quoted path {token!r}")
        return value
    if token.startswith("`"):
        if len(token) < 2 or not token.endswith("`"):
            raise ValueError(f"invalid quoted path {token!r}")
        return token[1:-1]
    return token


def _require_entry(words: list[str]) -> tuple[str, str]:
    if len(words) != 2:
        raise ValueError(f"malformed require line: {' '.join(words)!r}")
    return _unquote_token(words[0]), _unquote_token(words[1])


def _parse_go_mod(text: str) -> tuple[str, list[tuple[str, str]]]:
    module: str | None = None
    requires: list[tuple[str, str]] = []
    block: str | None = None
    for raw in text.splitlines():
        line = raw.split("//", 1)[0].strip()
        if not line:
            continue
        if block is not None:
            if line == ")":
                block = None
            elif block == "require":
                requires.append(_require_entry(line.split()))
            continue
        if line.endswith("("):
            block = line[:-1].strip()
            continue
        verb, *rest = line.split()
        if verb == "module":
            if len(rest) != 1:
                raise ValueError(f"malformed module line: {line!r}")
            module = _unquote_token(rest[0])
        elif verb == "require":
            requires.append(_require_entry(rest))
    if module is None:
        raise ValueError("no module directive")
    return module, requires


def parse_mod(mod_path: str) -> dict[str, str]:
    """Map the module and each requirement to the directory holding its sources.

    Returns an empty mapping when the file cannot be read or parsed.
    """
    try:
        with open(mod_path, encoding="utf-8") as handle:
            text = handle.read()
        module, requires = _parse_go_mod(text)
    except (OSError, ValueError):
        return {}
    go_path = os.environ.get("GOPATH", "")
    locations = {module: _go_dir(mod_path)}
    for path, version in requires:
        locations[path] = f"{go_path}/pkg/mod/{path}@{version}"
    return locations


def escape_path(path: str) -> str:
    """Escape a module path for the module cache: upper-case ``X`` becomes ``!x``."""
    if not path:
        raise ValueError("empty module path")
    if path.startswith("/") or path.endswith("/"):
        raise ValueError(f"malformed module path {path!r}: leading or trailing slash")
    for element in path.split("/"):
        if not element:
            raise ValueError(f"malformed module path {path!r}: empty path element")
        if element in (".", ".."):
            raise ValueError(f"malformed module path {path!r}: invalid path element")
    bad = [char for char in path if char not in _ESCAPE_ALLOWED]
    if bad:
        raise ValueError(f"malformed module path {path!r}: invalid char {bad[0]!r}")
    return "".join(f"!{char.lower()}" if "A" <= char <= "Z" else char for char in path)


def pkg_mod_path(pkg_name: str) -> str:
    """Directory holding the sources of ``pkg_name`` for the current module.

    Returns an empty string when no known module provides the package.
    """
    try:
        mod_path = find_go_mod(".")
    except (OSError, subprocess.SubprocessError):
        mod_path = ""
    locations = parse_mod(mod_path)
    tokens = pkg_name.split("/")
    for cut in range(len(tokens)):
        candidate = "/".join(tokens[: len(tokens) - cut])
        location = locations.get(candidate)
        if location is None:
            continue
        try:
            escaped = escape_path(candidate)
        except ValueError:
            escaped = ""
        location = location.replace(candidate, escaped, 1)
        if "/" not in candidate:
            return _go_join(location, "/".join(tokens))
        return _go_join(location, "/".join(tokens[len(tokens) - cut:]))
    return ""


def get_mod_name(mod_file: str = "go.mod") -> str:
    """Module name read from the first line of ``mod_file``, or an empty string."""
    try:
        with open(mod_file, "rb") as handle:
            raw = handle.readline()
    except OSError:
        return ""
    if not raw.endswith(b"\n"):
        return ""
    module = raw.decode("utf-8", "replace").strip("\n")
    tokens = module.split(" ")
    if len(tokens) == 2:
        module = tokens[1].strip()
    return module


def trim_local_pkg(pkg: str, mod_file: str = "go.mod") -> str:
    """Strip the current module's leading path elements from ``pkg``."""
    module = get_mod_name(mod_file)
    if not module:
        return pkg
    module_tokens = module.split("/")
    pkg_tokens = pkg.split("/")
    if len(pkg_tokens) < len(module_tokens):
        return pkg
    return _go_join("/".join(pkg_tokens[len(module_tokens):]))