"""Directory walking and fingerprinting utilities."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .logging import get_logger
from .models import FileEntry

DEFAULT_IGNORE: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "__pycache__",
    ".venv",
    "venv",
    ".cache",
    "coverage",
    ".turbo",
)

ALLOWED_HIDDEN = ".claude"

_logger = get_logger("walker")


def walk_directory(
    root: Path | str,
    ignore: Iterable[str] = DEFAULT_IGNORE,
    *,
    allowed_hidden: Optional[str] = ALLOWED_HIDDEN,
) -> List[FileEntry]:
    """Return every file and directory below ``root`` as ``FileEntry`` values.

    Names in ``ignore`` are skipped together with their subtree, as are
    dot-prefixed names other than ``allowed_hidden``. Siblings are visited in
    sorted order so the result is stable for an unchanged tree. Directories
    that cannot be listed and entries that cannot be stat'ed are skipped.
    """
    root_path = Path(root)
    ignored = frozenset(ignore)
    entries: List[FileEntry] = []
    _walk(root_path, root_path, ignored, allowed_hidden, entries)
    return entries


def _walk(
    directory: Path,
    root: Path,
    ignored: frozenset[str],
    allowed_hidden: Optional[str],
    entries: List[FileEntry],
) -> None:
    try:
        with os.scandir(directory) as iterator:
            items = sorted(iterator, key=lambda item: item.name)
    except OSError as exc:
        _logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for item in items:
        name = item.name
        if name in ignored:
            continue
        if name.startswith(".") and name != allowed_hidden:
            continue

        full_path = Path(item.path)
        try:
            is_dir = item.is_dir(follow_symlinks=False)
            stat_result = item.stat()
        except OSError as exc:
            _logger.debug("Skipping %s: %s", full_path, exc)
            continue

        entries.append(
            FileEntry(
                path=str(full_path),
                relative_path=full_path.relative_to(root).as_posix(),
                size=stat_result.st_size,
                mtime_ns=stat_result.st_mtime_ns,
                is_directory=is_dir,
            )
        )
        if is_dir:
            _walk(full_path, root, ignored, allowed_hidden, entries)


def compute_fingerprint(entries: Sequence[FileEntry]) -> str:
    """Digest the ``path:size:mtime_ms`` triples of all non-directory entries.

    File contents are never read: touching a file changes the fingerprint,
    rewriting it with the same size and timestamp does not.
    """
    lines = sorted(
        f"{entry.relative_path}:{entry.size}:{entry.mtime_ms}"
        for entry in entries
        if not entry.is_directory
    )
    return hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()


def hash_file(path: Path | str) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


__all__ = [
    "ALLOWED_HIDDEN",
    "DEFAULT_IGNORE",
    "compute_fingerprint",
    "hash_file",
    "walk_directory",
]
