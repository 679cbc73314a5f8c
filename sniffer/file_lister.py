"""Template file discovery and relative path normalisation."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List

from .config import DEFAULT_IGNORE_DIRS
from .logging import get_logger
from .models import FileListing, FileSet, RelativePath, SkippedPath

logger = get_logger("file_lister")


def to_relative(absolute_path: str | Path, root: str | Path) -> RelativePath:
    """Return ``absolute_path`` relative to ``root`` with ``/`` separators."""
    path_text = os.fspath(absolute_path)
    root_text = os.fspath(root).rstrip("/\\")
    remainder = path_text[len(root_text):]
    if not path_text.startswith(root_text) or not remainder or remainder[0] not in "/\\":
        raise ValueError(f"{path_text} is not located under {root}")
    relative = remainder.replace("\\", "/").lstrip("/")
    if not relative:
        raise ValueError(f"{path_text} is the root itself")
    if ".." in PurePosixPath(relative).parts:
        raise ValueError(f"{path_text} escapes {root_text}")
    return relative


def build_file_set(paths: Iterable[str], root: str | Path) -> FileSet:
    """Reduce absolute paths from one layer to its relative path set."""
    return frozenset(to_relative(path, root) for path in paths)


class FileLister:
    """Recursively lists files of one extension below a layer root."""

    def __init__(self, ignore_dir_names: Iterable[str] = DEFAULT_IGNORE_DIRS) -> None:
        self.ignore_dir_names = frozenset(ignore_dir_names)

    def list(self, root: str | Path, extension: str) -> List[str]:
        """Return absolute paths of matching files, sorted lexically."""
        return self.list_files(root, extension).files

    def list_files(self, root: str | Path, extension: str) -> FileListing:
        root_path = Path(root).expanduser()
        listing = FileListing(root=str(root_path))
        if not root_path.is_dir():
            logger.debug("Layer root %s does not exist; treating it as empty", root_path)
            return listing

        suffix = f".{extension.lstrip('.').lower()}"
        files: List[str] = []
        for path in self._iter_files(root_path, listing.skipped):
            if os.path.splitext(path)[1].lower() == suffix:
                files.append(path)
        listing.files = sorted(files)
        logger.debug(
            "Listed %d %s files under %s (%d skipped)",
            len(listing.files),
            suffix,
            root_path,
            len(listing.skipped),
        )
        return listing

    def _iter_files(self, root: Path, skipped: List[SkippedPath]) -> Iterator[str]:
        root_text = str(root)

        def _on_error(error: OSError) -> None:
            target = error.filename or str(root)
            reason = error.strerror or error.__class__.__name__
            logger.warning("Skipping unreadable path %s: %s", target, reason)
            skipped.append(SkippedPath(path=str(target), reason=reason))

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error, followlinks=True):
            if dirpath != root_text and _is_symlink_loop(dirpath):
                logger.warning("Skipping %s: symlink points back into its own ancestry", dirpath)
                skipped.append(SkippedPath(path=dirpath, reason="symlink loop"))
                dirnames[:] = []
                continue

            dirnames[:] = sorted(name for name in dirnames if name not in self.ignore_dir_names)

            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                if os.path.isfile(path):
                    yield path


def _is_symlink_loop(dirpath: str) -> bool:
    """Return True when ``dirpath`` is a symlink to itself or one of its ancestors.

    Real directories and symlinks to unrelated directories are walked even when
    another path already reached the same directory.
    """
    if not os.path.islink(dirpath):
        return False
    target = os.path.realpath(dirpath)
    parent = os.path.realpath(os.path.dirname(dirpath))
    return parent == target or parent.startswith(target.rstrip(os.sep) + os.sep)


__all__ = ["FileLister", "build_file_set", "to_relative"]
