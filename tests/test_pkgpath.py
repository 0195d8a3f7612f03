import os
import subprocess
from unittest.mock import patch

import pytest

from tgspec.pkgpath import (
    default_go_path,
    get_pkg_path,
    go_mod_path,
    module_path,
    pkg_path_from_go_mod,
    pkg_path_from_gopath,
)

MODULE = "example.com/proj"


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "proj"
    (root / "internal").mkdir(parents=True)
    (root / "go.mod").write_text(f"module {MODULE}\n\ngo 1.21\n")
    (root / "internal" / "a.go").write_text("package internal\n")
    return root


def test_module_path_first_line(project):
    assert module_path(str(project / "go.mod")) == MODULE


def test_module_path_after_comment(tmp_path):
    path = tmp_path / "go.mod"
    path.write_bytes(b"// header\nmodule example.com/x\r\n")
    assert module_path(str(path)) == "example.com/x"


def test_module_path_quoted(tmp_path):
    path = tmp_path / "go.mod"
    path.write_text('module "example.com/q"\n')
    assert module_path(str(path)) == "example.com/q"


def test_module_path_missing_directive(tmp_path):
    path = tmp_path / "go.mod"
    path.write_text("go 1.21\n")
    assert module_path(str(path)) == ""


def test_module_path_missing_file(tmp_path):
    assert module_path(str(tmp_path / "nothing.mod")) == ""


def test_pkg_path_from_go_mod_file(project):
    file_name = str(project / "internal" / "a.go")
    result = pkg_path_from_go_mod(file_name, False, str(project / "go.mod"))
    assert result == f"{MODULE}/internal"


def test_pkg_path_from_go_mod_dir(project):
    dir_name = str(project / "internal")
    result = pkg_path_from_go_mod(dir_name, True, str(project / "go.mod"))
    assert result == f"{MODULE}/internal"


def test_pkg_path_from_go_mod_without_module(tmp_path):
    mod = tmp_path / "go.mod"
    mod.write_text("go 1.21\n")
    with pytest.raises(ValueError, match="cannot determine module path"):
        pkg_path_from_go_mod(str(tmp_path / "a.go"), False, str(mod))


def test_pkg_path_from_gopath_file(tmp_path, monkeypatch):
    monkeypatch.setenv("GOPATH", str(tmp_path))
    file_name = os.path.join(str(tmp_path), "src", "github.com", "a", "b", "c.go")
    assert pkg_path_from_gopath(file_name, False) == "github.com/a/b"


def test_pkg_path_from_gopath_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("GOPATH", str(tmp_path))
    dir_name = os.path.join(str(tmp_path), "src", "github.com", "a", "b")
    assert pkg_path_from_gopath(dir_name, True) == "github.com/a/b"


def test_pkg_path_from_gopath_outside(tmp_path, monkeypatch):
    monkeypatch.setenv("GOPATH", str(tmp_path / "gopath"))
    with pytest.raises(ValueError, match="is not in GOPATH"):
        pkg_path_from_gopath("/elsewhere/x.go", False)


def test_default_go_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GOPATH", str(tmp_path))
    assert default_go_path() == str(tmp_path)


def test_default_go_path_from_home(monkeypatch, tmp_path):
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert default_go_path() == os.path.join(str(tmp_path), "go")


def test_go_mod_path_uses_file_directory_and_caches(project):
    file_name = str(project / "internal" / "a.go")
    expected = str(project / "go.mod")
    with patch("tgspec.gomod.subprocess.run", return_value=_completed(expected + "\n")) as run:
        first = go_mod_path(file_name, False)
        second = go_mod_path(file_name, False)
    assert first == expected
    assert second == expected
    assert run.call_count == 1
    assert run.call_args.kwargs["cwd"] == str(project / "internal")


def test_get_pkg_path_from_module(project):
    file_name = str(project / "internal" / "a.go")
    mod = str(project / "go.mod")
    with patch("tgspec.gomod.subprocess.run", return_value=_completed(mod + "\n")):
        assert get_pkg_path(file_name, False) == f"{MODULE}/internal"


def test_get_pkg_path_falls_back_to_gopath(tmp_path, monkeypatch):
    monkeypatch.setenv("GOPATH", str(tmp_path))
    package_dir = tmp_path / "src" / "github.com" / "a" / "b"
    package_dir.mkdir(parents=True)
    failure = subprocess.CalledProcessError(1, ["go", "env", "GOMOD"])
    with patch("tgspec.gomod.subprocess.run", side_effect=failure):
        assert get_pkg_path(str(package_dir), True) == "github.com/a/b"