"""Replace the native ``keytar`` module with a no-op stub when it cannot load.

``keytar`` (pulled in by the Smithery CLI) links against ``libsecret-1.so.0``.
Build containers usually lack that library, and the failed ``dlopen`` aborts
the whole build. This setup step detects the failure and swaps the module's
entry point for an in-memory stub exposing the same five functions.

The installer never fails: every error is logged as a warning and swallowed,
and the CLI always exits 0. It is only run explicitly (``maiga-keytar-stub``);
nothing on the request-serving path imports it.
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from .exceptions import CredentialStubError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

STUB_MARKER = "maiga-keytar-stub"
BACKUP_SUFFIX = ".backup"

# Error signatures of a keytar build whose libsecret dependency is missing
MISSING_LIBRARY_SIGNATURES = (
    "ERR_DLOPEN_FAILED",
    "libsecret",
    "cannot open shared object file",
)

STUB_SOURCE = f"""// {STUB_MARKER}: no-op keytar replacement
// The native keytar module could not be loaded (libsecret-1.so.0 is missing),
// so credentials are never stored.

module.exports = {{
  getPassword: async () => null,
  setPassword: async () => {{}},
  deletePassword: async () => false,
  findPassword: async () => null,
  findCredentials: async () => []
}};
"""

Loader = Callable[[Path], None]


def default_search_paths(project_root: Path) -> list[Path]:
    """Known install locations of keytar, in lookup order."""
    node_modules = project_root / "node_modules"
    return [
        node_modules / "keytar",
        node_modules / "@smithery" / "cli" / "node_modules" / "keytar",
    ]


def node_loader(module_dir: Path) -> None:
    """Try to ``require`` the module with Node.js.

    Raises:
        CredentialStubError: If node is unavailable or the require fails
    """
    try:
        completed = subprocess.run(
            ["node", "-e", f"require({json.dumps(str(module_dir))})"],
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise CredentialStubError(f"Unable to run node: {exc}") from exc

    if completed.returncode != 0:
        raise CredentialStubError(
            completed.stderr.strip() or f"node exited with status {completed.returncode}"
        )


def find_module(search_paths: Sequence[Path]) -> Path | None:
    for candidate in search_paths:
        if candidate.exists():
            return candidate
    return None


def is_missing_library_error(error: BaseException) -> bool:
    message = str(error)
    return any(signature in message for signature in MISSING_LIBRARY_SIGNATURES)


def _backup_once(target: Path) -> None:
    """Copy ``target`` aside; an existing backup is never overwritten."""
    backup = target.with_name(target.name + BACKUP_SUFFIX)
    if backup.exists() or not target.exists():
        return
    try:
        shutil.copy2(target, backup)
        logger.info(f"Backed up original {target.name} to {backup}")
    except OSError as exc:
        logger.warning(f"Failed to back up {target}: {exc}")


def _install_stub(module_dir: Path) -> None:
    entry_point = module_dir / "lib" / "keytar.js"

    if entry_point.exists() and STUB_MARKER in entry_point.read_text(
        encoding="utf-8", errors="replace"
    ):
        logger.info(f"keytar stub already installed at {entry_point}, skipping")
        return

    entry_point.parent.mkdir(parents=True, exist_ok=True)
    _backup_once(entry_point)
    entry_point.write_text(STUB_SOURCE, encoding="utf-8")
    logger.info(f"keytar stub created at {entry_point}")


def ensure_usable_credential_module(
    project_root: Path | None = None,
    *,
    search_paths: Sequence[Path] | None = None,
    loader: Loader | None = None,
) -> None:
    """Make sure ``keytar`` either loads or is replaced by the no-op stub.

    Args:
        project_root: Directory holding ``node_modules``; defaults to the cwd
        search_paths: Candidate module directories, overriding the defaults
        loader: Callable raising when the module cannot be loaded
    """
    root = project_root or Path.cwd()
    paths = search_paths if search_paths is not None else default_search_paths(root)
    load = loader or node_loader

    try:
        module_dir = find_module(paths)
        if module_dir is None:
            logger.info("keytar not found in node_modules, skipping stub creation")
            return

        try:
            load(module_dir)
        except Exception as exc:
            if is_missing_library_error(exc):
                logger.info(f"keytar failed to load due to missing libsecret: {exc}")
            else:
                logger.info(f"keytar failed to load: {exc}")
        else:
            logger.info("keytar loaded successfully, no stub needed")
            return

        _install_stub(module_dir)
    except Exception as exc:
        # Never fail the build over the stub
        logger.warning(f"Failed to create keytar stub: {exc}")


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry point; always returns 0."""
    parser = argparse.ArgumentParser(
        prog="maiga-keytar-stub",
        description="Replace keytar with a no-op stub when libsecret is unavailable.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Project directory containing node_modules (default: current directory)",
    )
    args = parser.parse_args(argv)

    configure_logging("INFO")
    ensure_usable_credential_module(args.root)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
