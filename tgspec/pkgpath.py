"""Working out the import path of a Go source file or directory."""

from __future__ import annotations

import functools
import json
import os
import subprocess
from pathlib import Path

from tgspec.gomod import _go_clean, _go_dir, _go_join, find_go_mod
from tgspec.logformat import get_logger

_MODULE_PREFIX = b"\nmodule "

_go_mod_cache: dict[str, str] = {}
_module_path_cache: dict[str, str] = {}

_log = get_logger()


def _file_dir(path: str) -> str:
    directory = os.path.dirname(path)
    return os.path.normpath(directory) if directory else "."


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/")


def go_mod_path(file_name: str, is_dir: bool) -> str:
    """Path of the ``go.mod`` governing ``file_name``; results are cached."""
    root = file_name if is_dir else _file_dir(file_name)
    if root in _go_mod_cache:
        return _go_mod_cache[root]
    try:
        found = find_go_mod(root)
    except BaseException:
        _go_mod_cache[root] = ""
        raise
    _go_mod_cache[root] = found
    return found


def get_pkg_path(file_name: str, is_dir: bool) -> str:
    """Import path of ``file_name``, from its module or else from GOPATH."""
    try:
        mod_file = go_mod_path(file_name, is_dir)
    except (OSError, subprocess.SubprocessError) as error:
        _log.error(
            "cannot find go.mod because of: %s", error, extra={"fields": {"module": "server"}}
        )
        mod_file = ""
    if "go.mod" in mod_file:
        return pkg_path_from_go_mod(file_name, is_dir, mod_file)
    return pkg_path_from_gopath(file_name, is_dir)


def pkg_path_from_go_mod(file_name: str, is_dir: bool, go_mod_path: str) -> str:
    """Import path of ``file_name`` inside the module described by ``go_mod_path``."""
    module = module_path(go_mod_path)
    if not module:
        raise ValueError(f"cannot determine module path from {go_mod_path}")
    relative = _to_slash(file_name.removeprefix(_file_dir(go_mod_path)))
    joined = _go_join(module, relative)
    return _go_clean(joined) if is_dir else _go_dir(joined)


def _read_module_path(go_mod_path: str) -> str:
    try:
        data = Path(go_mod_path).read_bytes()
    except OSError:
        return ""
    if data.startswith(_MODULE_PREFIX[1:]):
        start = 0
    else:
        start = data.find(_MODULE_PREFIX)
        if start < 0:
            return ""
        start += 1
    line = data[start:]
    end = line.find(b"\n")
    if end >= 0:
        line = line[:end]
    if line.endswith(b"\r"):
        line = line[:-1]
    text = line[len(b"module "):].decode("utf-8", "replace").strip()
    if text.startswith('"'):
        try:
            value = json.loads(text)
        except ValueError:
            return ""
        if not isinstance(value, str):
            return ""
        text = value
    return text


def module_path(go_mod_path: str) -> str:
    """Module path declared in ``go_mod_path``; empty when absent. Cached."""
    if go_mod_path not in _module_path_cache:
        _module_path_cache[go_mod_path] = _read_module_path(go_mod_path)
    return _module_path_cache[go_mod_path]


@functools.lru_cache(maxsize=None)
def _cached_default_go_path() -> str:
    return default_go_path()


def pkg_path_from_gopath(file_name: str, is_dir: bool) -> str:
    """Import path of ``file_name`` relative to a GOPATH ``src`` directory."""
    gopath = os.environ.get("GOPATH", "")
    if not gopath:
        try:
            gopath = _cached_default_go_path()
        except (OSError, subprocess.SubprocessError) as error:
            raise RuntimeError(f"cannot determine GOPATH: {error}") from error
    entries = gopath.split(os.pathsep) if gopath else []
    for entry in entries:
        prefix = os.path.normpath(os.path.join(entry, "src")) + os.sep
        if file_name.startswith(prefix):
            relative = _to_slash(file_name[len(prefix):])
            return _go_clean(relative) if is_dir else _go_dir(relative)
    checked = "\n".join(entries)
    raise ValueError(f"file '{file_name}' is not in GOPATH. Checked paths:\n{checked}")


def default_go_path() -> str:
    """GOPATH from the environment, the home directory, or the Go tool."""
    gopath = os.environ.get("GOPATH")
    if gopath:
        return gopath
    home = os.environ.get("USERPROFILE" if os.name == "nt" else "HOME")
    if home:
        return os.path.join(home, "go")
    result = subprocess.run(
        ["go", "env", "GOPATH"], capture_output=True, text=True, check=True
    )
    return result.stdout.strip()