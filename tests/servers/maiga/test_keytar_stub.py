"""Tests for the keytar stub installer."""

from __future__ import annotations

from pathlib import Path

import pytest

from servers.maiga import keytar_stub
from servers.maiga.exceptions import CredentialStubError
from servers.maiga.keytar_stub import (
    STUB_MARKER,
    default_search_paths,
    ensure_usable_credential_module,
    is_missing_library_error,
)

ORIGINAL_SOURCE = "module.exports = require('../build/Release/keytar.node');\n"


def failing_loader(_module_dir: Path) -> None:
    raise CredentialStubError(
        "Error: libsecret-1.so.0: cannot open shared object file: No such file or directory"
    )


def working_loader(_module_dir: Path) -> None:
    return None


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project with a freshly installed (non-stubbed) keytar module."""
    lib_dir = tmp_path / "node_modules" / "keytar" / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "keytar.js").write_text(ORIGINAL_SOURCE, encoding="utf-8")
    return tmp_path


def _files(root: Path) -> set[Path]:
    return {p.relative_to(root) for p in root.rglob("*") if p.is_file()}


def test_stub_installed_once_and_idempotent(project_root: Path):
    lib_dir = project_root / "node_modules" / "keytar" / "lib"

    ensure_usable_credential_module(project_root, loader=failing_loader)
    ensure_usable_credential_module(project_root, loader=failing_loader)

    backups = list(lib_dir.glob("*.backup"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == ORIGINAL_SOURCE

    stub = (lib_dir / "keytar.js").read_text(encoding="utf-8")
    assert STUB_MARKER in stub
    for name in ("getPassword", "setPassword", "deletePassword", "findPassword", "findCredentials"):
        assert name in stub

    before = {p: p.stat().st_mtime_ns for p in lib_dir.iterdir()}
    ensure_usable_credential_module(project_root, loader=failing_loader)
    after = {p: p.stat().st_mtime_ns for p in lib_dir.iterdir()}
    assert before == after


def test_missing_module_is_a_noop(tmp_path: Path):
    ensure_usable_credential_module(tmp_path, loader=failing_loader)

    assert _files(tmp_path) == set()


def test_loadable_module_is_left_alone(project_root: Path):
    ensure_usable_credential_module(project_root, loader=working_loader)

    entry_point = project_root / "node_modules" / "keytar" / "lib" / "keytar.js"
    assert entry_point.read_text(encoding="utf-8") == ORIGINAL_SOURCE
    assert not list(entry_point.parent.glob("*.backup"))


def test_other_load_errors_also_get_stubbed(project_root: Path):
    def broken_loader(_module_dir: Path) -> None:
        raise RuntimeError("Cannot find module 'bindings'")

    ensure_usable_credential_module(project_root, loader=broken_loader)

    entry_point = project_root / "node_modules" / "keytar" / "lib" / "keytar.js"
    assert STUB_MARKER in entry_point.read_text(encoding="utf-8")


def test_nested_smithery_location_is_found(tmp_path: Path):
    nested = tmp_path / "node_modules" / "@smithery" / "cli" / "node_modules" / "keytar"
    nested.mkdir(parents=True)

    ensure_usable_credential_module(tmp_path, loader=failing_loader)

    assert STUB_MARKER in (nested / "lib" / "keytar.js").read_text(encoding="utf-8")
    assert not list((nested / "lib").glob("*.backup"))


def test_explicit_search_paths_override_defaults(tmp_path: Path):
    custom = tmp_path / "vendor" / "keytar"
    custom.mkdir(parents=True)

    ensure_usable_credential_module(
        tmp_path, search_paths=[custom], loader=failing_loader
    )

    assert (custom / "lib" / "keytar.js").exists()


def test_write_failures_are_swallowed(project_root: Path, monkeypatch, caplog):
    def refuse(*_args, **_kwargs):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(Path, "write_text", refuse)

    ensure_usable_credential_module(project_root, loader=failing_loader)

    assert "Failed to create keytar stub" in caplog.text


def test_default_search_paths_order(tmp_path: Path):
    assert default_search_paths(tmp_path) == [
        tmp_path / "node_modules" / "keytar",
        tmp_path / "node_modules" / "@smithery" / "cli" / "node_modules" / "keytar",
    ]


@pytest.mark.parametrize(
    "message, expected",
    [
        ("ERR_DLOPEN_FAILED", True),
        ("libsecret-1.so.0: cannot open shared object file", True),
        ("Cannot find module 'keytar'", False),
    ],
)
def test_missing_library_classification(message, expected):
    assert is_missing_library_error(RuntimeError(message)) is expected


def test_node_loader_reports_missing_node(monkeypatch, tmp_path: Path):
    def no_node(*_args, **_kwargs):
        raise FileNotFoundError("node")

    monkeypatch.setattr(keytar_stub.subprocess, "run", no_node)

    with pytest.raises(CredentialStubError, match="Unable to run node"):
        keytar_stub.node_loader(tmp_path)


def test_main_always_returns_zero(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(keytar_stub, "configure_logging", lambda *_args: None)

    assert keytar_stub.main(["--root", str(tmp_path)]) == 0
