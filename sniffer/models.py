"""Core data models shared across sniffer components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

RelativePath = str
FileSet = FrozenSet[RelativePath]

DEFAULT_TEMPLATE_SENTINEL = "default"

DEFAULT_CORE_TEMPLATES: Tuple[str, ...] = (
    "index.php",
    "front-page.php",
    "home.php",
    "single.php",
    "page.php",
    "archive.php",
    "category.php",
    "tag.php",
    "author.php",
    "date.php",
    "search.php",
    "404.php",
    "attachment.php",
    "taxonomy.php",
    "singular.php",
)


@dataclass(frozen=True)
class SkippedPath:
    """A subtree the lister could not read."""

    path: str
    reason: str


@dataclass
class FileListing:
    """Absolute file paths found under one layer root."""

    root: str
    files: List[str] = field(default_factory=list)
    skipped: List[SkippedPath] = field(default_factory=list)


@dataclass(frozen=True)
class CoverageEntry:
    """Presence of one core template across the child and parent layers."""

    name: str
    in_child: bool
    in_parent: bool
    notes: Tuple[str, ...]
    severity: str


@dataclass(frozen=True)
class OverrideReport:
    overrides: FileSet = frozenset()
    parent_only: FileSet = frozenset()


@dataclass(frozen=True)
class MiscReport:
    child_misc: FileSet = frozenset()
    parent_misc: FileSet = frozenset()


@dataclass(frozen=True)
class CatalogEntry:
    """Selectable template declared by the active layer."""

    name: str
    path: str


@dataclass(frozen=True)
class UsageReport:
    unused: Tuple[CatalogEntry, ...] = ()
    missing_from_disk: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BlockTemplateReport:
    """Block-style template files found under the conventional directories."""

    paths: Tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.paths)


@dataclass
class TemplateReport:
    """Fully computed audit result handed to renderers."""

    child_root: str
    parent_root: Optional[str]
    has_parent: bool
    coverage: List[CoverageEntry]
    overrides: OverrideReport
    misc: MiscReport
    catalog: List[CatalogEntry]
    used_values: List[str]
    usage: UsageReport
    block_templates: BlockTemplateReport
    child_files: FileSet = frozenset()
    parent_files: FileSet = frozenset()
    skipped: List[SkippedPath] = field(default_factory=list)
    child_theme_name: Optional[str] = None
    parent_theme_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe mapping with every set sorted lexically."""
        return {
            "child_theme_name": self.child_theme_name,
            "child_root": self.child_root,
            "parent_theme_name": self.parent_theme_name,
            "parent_root": self.parent_root,
            "has_parent": self.has_parent,
            "coverage": [
                {
                    "name": entry.name,
                    "in_child": entry.in_child,
                    "in_parent": entry.in_parent,
                    "notes": list(entry.notes),
                    "severity": entry.severity,
                }
                for entry in self.coverage
            ],
            "overrides": sorted(self.overrides.overrides),
            "parent_only": sorted(self.overrides.parent_only),
            "child_misc": sorted(self.misc.child_misc),
            "parent_misc": sorted(self.misc.parent_misc),
            "catalog": [{"name": entry.name, "path": entry.path} for entry in self.catalog],
            "unused_templates": [
                {"name": entry.name, "path": entry.path} for entry in self.usage.unused
            ],
            "missing_templates": list(self.usage.missing_from_disk),
            "block_templates": {
                "count": self.block_templates.count,
                "paths": list(self.block_templates.paths),
            },
            "skipped": [{"path": item.path, "reason": item.reason} for item in self.skipped],
        }
