"""Shallow detection of block theme template files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from ..config import DEFAULT_BLOCK_DIRS
from ..models import BlockTemplateReport


class BlockTemplateCounter:
    """Counts ``*.html`` files sitting directly in the conventional block directories.

    Only the directory listing is inspected; template markup is never parsed.
    """

    def __init__(self, block_dirs: Iterable[str] = DEFAULT_BLOCK_DIRS) -> None:
        self.block_dirs = tuple(block_dirs)

    def count(
        self,
        child_root: str | Path,
        parent_root: Optional[str | Path],
        has_parent: bool,
    ) -> BlockTemplateReport:
        roots: List[Path] = [Path(child_root)]
        if has_parent and parent_root is not None and Path(parent_root) != Path(child_root):
            roots.append(Path(parent_root))

        paths: List[str] = []
        for root in roots:
            for name in self.block_dirs:
                directory = root / name
                if not directory.is_dir():
                    continue
                paths.extend(
                    str(entry) for entry in sorted(directory.glob("*.html")) if entry.is_file()
                )
        return BlockTemplateReport(paths=tuple(paths))


__all__ = ["BlockTemplateCounter"]
