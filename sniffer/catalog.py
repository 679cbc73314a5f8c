"""Sources for the template catalog and for the values content records use."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import yaml

from .config import DEFAULT_EXTENSION, DEFAULT_IGNORE_DIRS, ConfigError
from .file_lister import FileLister, to_relative
from .logging import get_logger
from .models import CatalogEntry

logger = get_logger("catalog")

_HEADER_BYTES = 8192
THEME_STYLESHEET = "style.css"
_HEADER_COMMENT_END = re.compile(r"\s*(?:\*/|\?>).*$")


class TemplateCatalogProvider(ABC):
    """Supplies the selectable templates known to the active theme."""

    @abstractmethod
    def get_catalog(self) -> Sequence[CatalogEntry]:
        """Return catalog entries in display order."""


class UsageDataProvider(ABC):
    """Supplies the template values content records declare."""

    @abstractmethod
    def get_used_values(self) -> Sequence[str]:
        """Return every declared value; duplicates are allowed."""


class StaticCatalogProvider(TemplateCatalogProvider):
    """Catalog declared up front as a ``display name -> path`` mapping."""

    def __init__(self, templates: Mapping[str, str] | Iterable[CatalogEntry]) -> None:
        if isinstance(templates, Mapping):
            self._entries = [CatalogEntry(name=str(k), path=str(v)) for k, v in templates.items()]
        else:
            self._entries = list(templates)

    def get_catalog(self) -> Sequence[CatalogEntry]:
        return list(self._entries)


class HeaderCatalogProvider(TemplateCatalogProvider):
    """Discovers page templates from their ``Template Name:`` file header.

    Files at the layer root and one directory below are considered. A child
    file shadows a parent file with the same relative path.
    """

    def __init__(
        self,
        child_root: str | Path,
        parent_root: Optional[str | Path] = None,
        *,
        extension: str = DEFAULT_EXTENSION,
        ignore_dir_names: Iterable[str] = DEFAULT_IGNORE_DIRS,
    ) -> None:
        self.child_root = Path(child_root)
        self.parent_root = Path(parent_root) if parent_root is not None else None
        self.extension = extension
        self._lister = FileLister(ignore_dir_names)

    def get_catalog(self) -> Sequence[CatalogEntry]:
        by_path: Dict[str, str] = {}
        roots = [self.parent_root, self.child_root] if self.parent_root else [self.child_root]
        for root in roots:
            by_path.update(self._scan_layer(root))
        entries = [CatalogEntry(name=name, path=path) for path, name in by_path.items()]
        return sorted(entries, key=lambda entry: (entry.name, entry.path))

    def _scan_layer(self, root: Path) -> Dict[str, str]:
        listing = self._lister.list_files(root, self.extension)
        found: Dict[str, str] = {}
        for path in listing.files:
            rel_path = to_relative(path, listing.root)
            if rel_path.count("/") > 1:
                continue
            name = read_template_name(Path(path))
            if name:
                found[rel_path] = name
        return found


class ChainCatalogProvider(TemplateCatalogProvider):
    """Concatenates several catalogs; the first entry for a path wins."""

    def __init__(self, *providers: TemplateCatalogProvider) -> None:
        self.providers = providers

    def get_catalog(self) -> Sequence[CatalogEntry]:
        seen: set[str] = set()
        entries: List[CatalogEntry] = []
        for provider in self.providers:
            for entry in provider.get_catalog():
                if entry.path in seen:
                    continue
                seen.add(entry.path)
                entries.append(entry)
        return entries


class StaticUsageProvider(UsageDataProvider):
    def __init__(self, values: Iterable[str] = ()) -> None:
        self._values = [str(value) for value in values]

    def get_used_values(self) -> Sequence[str]:
        return list(self._values)


class FileUsageProvider(UsageDataProvider):
    """Reads used values from an exported file.

    ``.json`` and ``.yml``/``.yaml`` files must hold a list; anything else is
    read as one value per line, skipping blanks and ``#`` comments.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_used_values(self) -> Sequence[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Usage file %s not found; assuming no template is used", self.path)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Could not read usage file {self.path}: {exc}") from exc

        suffix = self.path.suffix.lower()
        if suffix == ".json":
            try:
                loaded = json.loads(text) if text.strip() else []
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Failed to parse {self.path.name}: {exc}") from exc
            return self._as_values(loaded)
        if suffix in {".yml", ".yaml"}:
            try:
                loaded = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Failed to parse {self.path.name}: {exc}") from exc
            return self._as_values(loaded or [])

        values: List[str] = []
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            values.append(line)
        return values

    def _as_values(self, loaded: object) -> List[str]:
        if not isinstance(loaded, list):
            raise ConfigError(f"{self.path.name} must contain a list of template values")
        return [str(item) for item in loaded if isinstance(item, (str, int, float))]


def read_header_field(path: Path, field: str) -> Optional[str]:
    """Return the value of a ``Field: value`` line in the comment header of ``path``."""
    try:
        with path.open("rb") as handle:
            head = handle.read(_HEADER_BYTES)
    except OSError as exc:
        logger.debug("Could not read header of %s: %s", path, exc)
        return None
    match = _header_pattern(field).search(head.decode("utf-8", errors="replace").replace("\r", "\n"))
    if not match:
        return None
    value = _HEADER_COMMENT_END.sub("", match.group(1)).strip()
    return value or None


def read_template_name(path: Path) -> Optional[str]:
    """Return the ``Template Name:`` header of a template file, if it declares one."""
    return read_header_field(path, "Template Name")


def read_theme_name(root: str | Path) -> Optional[str]:
    """Return the ``Theme Name:`` declared in the ``style.css`` of a layer root."""
    return read_header_field(Path(root) / THEME_STYLESHEET, "Theme Name")


@lru_cache(maxsize=None)
def _header_pattern(field: str) -> re.Pattern[str]:
    return re.compile(
        rf"^(?:[ \t]*<\?php)?[ \t/*#@]*{re.escape(field)}:(.*)$",
        re.MULTILINE | re.IGNORECASE,
    )


__all__ = [
    "ChainCatalogProvider",
    "FileUsageProvider",
    "HeaderCatalogProvider",
    "StaticCatalogProvider",
    "StaticUsageProvider",
    "TemplateCatalogProvider",
    "UsageDataProvider",
    "read_header_field",
    "read_template_name",
    "read_theme_name",
]
