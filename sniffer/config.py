"""Configuration loading for sniffer (.sniffer.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .models import DEFAULT_CORE_TEMPLATES

CONFIG_FILENAME = ".sniffer.yml"

DEFAULT_IGNORE_DIRS: Tuple[str, ...] = ("node_modules", "vendor")
DEFAULT_BLOCK_DIRS: Tuple[str, ...] = ("templates", "parts")
DEFAULT_EXTENSION = "php"

_OUTPUT_FORMATS = {"markdown", "json"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Explicit inputs of one audit run."""

    child_root: Path
    parent_root: Optional[Path] = None
    core_names: Tuple[str, ...] = DEFAULT_CORE_TEMPLATES
    ignore_dir_names: frozenset[str] = frozenset(DEFAULT_IGNORE_DIRS)
    extension: str = DEFAULT_EXTENSION
    block_dirs: Tuple[str, ...] = DEFAULT_BLOCK_DIRS

    @property
    def has_parent(self) -> bool:
        return self.parent_root is not None


@dataclass
class UsageConfig:
    """Where the used template values come from."""

    file: Optional[Path] = None
    values: List[str] = field(default_factory=list)


@dataclass
class SnifferConfig:
    """Represents the settings defined in .sniffer.yml."""

    root: Path
    child_root: Optional[Path] = None
    parent_root: Optional[Path] = None
    extension: str = DEFAULT_EXTENSION
    core_templates: List[str] = field(default_factory=lambda: list(DEFAULT_CORE_TEMPLATES))
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))
    block_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_BLOCK_DIRS))
    catalog: Dict[str, str] = field(default_factory=dict)
    catalog_from_headers: bool = True
    usage: UsageConfig = field(default_factory=UsageConfig)
    output_format: str = "markdown"

    def scan_config(
        self,
        *,
        child_root: Optional[Path] = None,
        parent_root: Optional[Path] = None,
    ) -> ScanConfig:
        """Build the scan inputs, letting explicit roots win over configured ones."""
        child = child_root or self.child_root or self.root
        parent = parent_root or self.parent_root
        return ScanConfig(
            child_root=Path(child),
            parent_root=Path(parent) if parent is not None else None,
            core_names=tuple(self.core_templates),
            ignore_dir_names=frozenset(self.ignore_dirs),
            extension=self.extension,
            block_dirs=tuple(self.block_dirs),
        )


def load_config(config_path: Path) -> SnifferConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SnifferConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = SnifferConfig(root=root)
    config.child_root = _as_path(root, data.get("child_root"))
    config.parent_root = _as_path(root, data.get("parent_root"))

    extension = _as_str(data.get("extension"))
    if extension:
        config.extension = extension.lstrip(".").lower()

    if "core_templates" in data:
        config.core_templates = _as_str_list(data.get("core_templates"))
    if "ignore_dirs" in data:
        config.ignore_dirs = _as_str_list(data.get("ignore_dirs"))
    if "block_dirs" in data:
        config.block_dirs = _as_str_list(data.get("block_dirs"))

    catalog_data = data.get("catalog")
    if catalog_data is not None and not isinstance(catalog_data, dict):
        raise ConfigError("catalog must be a mapping of template name to path")
    config.catalog = {
        str(name): str(path)
        for name, path in _as_dict(catalog_data).items()
        if path is not None
    }

    from_headers = _as_bool(data.get("catalog_from_headers"))
    if from_headers is not None:
        config.catalog_from_headers = from_headers

    usage_data = _as_dict(data.get("usage"))
    if usage_data:
        config.usage = UsageConfig(
            file=_as_path(root, usage_data.get("file")),
            values=_as_str_list(usage_data.get("values")),
        )

    output_data = _as_dict(data.get("output"))
    output_format = _as_str(output_data.get("format")) if output_data else None
    if output_format:
        if output_format not in _OUTPUT_FORMATS:
            choices = ", ".join(sorted(_OUTPUT_FORMATS))
            raise ConfigError(f"output.format must be one of: {choices}")
        config.output_format = output_format

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
