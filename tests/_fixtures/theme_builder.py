"""Helper utilities for constructing temporary theme layers in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from sniffer.config import ScanConfig


class ThemeBuilder:
    """Writes child and parent theme files into throwaway directories."""

    def __init__(self, tmp_path: Path) -> None:
        self.child = tmp_path / "child"
        self.parent = tmp_path / "parent"
        self.child.mkdir()

    def write_child(self, files: Mapping[str, str] | Iterable[str]) -> None:
        """Write `path -> contents` entries (or empty files) into the child theme."""
        self._write(self.child, files)

    def write_parent(self, files: Mapping[str, str] | Iterable[str]) -> None:
        """Write `path -> contents` entries (or empty files) into the parent theme."""
        self.parent.mkdir(exist_ok=True)
        self._write(self.parent, files)

    def scan_config(self, *, with_parent: bool = True, **overrides: object) -> ScanConfig:
        """Return scan inputs for the built layers."""
        parent = self.parent if with_parent else None
        return ScanConfig(child_root=self.child, parent_root=parent, **overrides)  # type: ignore[arg-type]

    @staticmethod
    def _write(root: Path, files: Mapping[str, str] | Iterable[str]) -> None:
        items = files.items() if isinstance(files, Mapping) else ((name, "") for name in files)
        for relative, content in items:
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")


__all__ = ["ThemeBuilder"]
