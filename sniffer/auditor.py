"""Coordinates one template audit from layer listing to the assembled report."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Tuple

from .analyzers import (
    BlockTemplateCounter,
    CoreCoverageAnalyzer,
    MiscClassifier,
    OverrideAnalyzer,
    UsageReconciler,
)
from .catalog import (
    ChainCatalogProvider,
    FileUsageProvider,
    HeaderCatalogProvider,
    StaticCatalogProvider,
    StaticUsageProvider,
    TemplateCatalogProvider,
    UsageDataProvider,
    read_theme_name,
)
from .config import ScanConfig, SnifferConfig
from .file_lister import FileLister, build_file_set
from .logging import get_logger
from .models import FileListing, TemplateReport


class TemplateAuditor:
    """Runs the scan-and-diff pipeline for a child layer and its optional parent."""

    def __init__(
        self,
        coverage_analyzer: CoreCoverageAnalyzer | None = None,
        override_analyzer: OverrideAnalyzer | None = None,
        misc_classifier: MiscClassifier | None = None,
        usage_reconciler: UsageReconciler | None = None,
        *,
        parallel: bool = False,
    ) -> None:
        self.coverage_analyzer = coverage_analyzer or CoreCoverageAnalyzer()
        self.override_analyzer = override_analyzer or OverrideAnalyzer()
        self.misc_classifier = misc_classifier or MiscClassifier()
        self.usage_reconciler = usage_reconciler or UsageReconciler()
        self.parallel = parallel
        self.logger = get_logger("auditor")

    def audit(
        self,
        config: ScanConfig,
        catalog_provider: TemplateCatalogProvider | None = None,
        usage_provider: UsageDataProvider | None = None,
    ) -> TemplateReport:
        """Scan both layers and reconcile the catalog against used values."""
        has_parent = config.has_parent
        self.logger.info(
            "Auditing %s (parent: %s)",
            config.child_root,
            config.parent_root if has_parent else "none",
        )

        child_listing, parent_listing = self._list_layers(config)
        child_set = build_file_set(child_listing.files, child_listing.root)
        if parent_listing is not None:
            parent_set = build_file_set(parent_listing.files, parent_listing.root)
        else:
            # Single-layer themes compare the child against itself.
            parent_set = child_set
        self.logger.debug(
            "Layer sizes: child=%d parent=%d", len(child_set), len(parent_set)
        )

        coverage = self.coverage_analyzer.analyze(child_set, parent_set, config.core_names)
        overrides = self.override_analyzer.analyze(child_set, parent_set, has_parent)
        misc = self.misc_classifier.analyze(child_set, parent_set, config.core_names)

        catalog = list(catalog_provider.get_catalog()) if catalog_provider else []
        used_values = list(usage_provider.get_used_values()) if usage_provider else []
        usage = self.usage_reconciler.reconcile(catalog, used_values)

        block_templates = BlockTemplateCounter(config.block_dirs).count(
            config.child_root, config.parent_root, has_parent
        )

        skipped = list(child_listing.skipped)
        if parent_listing is not None:
            skipped.extend(parent_listing.skipped)

        self.logger.info(
            "Audit finished: %d overrides, %d unused templates, %d missing templates",
            len(overrides.overrides),
            len(usage.unused),
            len(usage.missing_from_disk),
        )
        return TemplateReport(
            child_root=str(config.child_root),
            parent_root=str(config.parent_root) if has_parent else None,
            has_parent=has_parent,
            coverage=coverage,
            overrides=overrides,
            misc=misc,
            catalog=catalog,
            used_values=used_values,
            usage=usage,
            block_templates=block_templates,
            child_files=child_set,
            parent_files=parent_set,
            skipped=skipped,
            child_theme_name=_theme_name(config.child_root),
            parent_theme_name=_theme_name(config.parent_root) if has_parent else None,
        )

    def audit_from_config(
        self,
        config: SnifferConfig,
        *,
        child_root: Optional[Path] = None,
        parent_root: Optional[Path] = None,
        usage_file: Optional[Path] = None,
    ) -> TemplateReport:
        """Run an audit with providers built from a loaded .sniffer.yml."""
        scan = config.scan_config(child_root=child_root, parent_root=parent_root)
        return self.audit(
            scan,
            build_catalog_provider(config, scan),
            build_usage_provider(config, usage_file=usage_file),
        )

    def _list_layers(self, config: ScanConfig) -> Tuple[FileListing, Optional[FileListing]]:
        lister = FileLister(config.ignore_dir_names)
        if config.parent_root is None:
            return lister.list_files(config.child_root, config.extension), None

        if not self.parallel:
            return (
                lister.list_files(config.child_root, config.extension),
                lister.list_files(config.parent_root, config.extension),
            )

        # Both futures are joined before any analyzer sees a file set.
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="sniffer-layer") as executor:
            child_future = executor.submit(lister.list_files, config.child_root, config.extension)
            parent_future = executor.submit(lister.list_files, config.parent_root, config.extension)
            return child_future.result(), parent_future.result()


def _theme_name(root: Path) -> str:
    # A theme without a readable Theme Name header is known by its directory.
    return read_theme_name(root) or root.name


def build_catalog_provider(config: SnifferConfig, scan: ScanConfig) -> TemplateCatalogProvider:
    providers: list[TemplateCatalogProvider] = []
    if config.catalog:
        providers.append(StaticCatalogProvider(config.catalog))
    if config.catalog_from_headers:
        providers.append(
            HeaderCatalogProvider(
                scan.child_root,
                scan.parent_root,
                extension=scan.extension,
                ignore_dir_names=scan.ignore_dir_names,
            )
        )
    return ChainCatalogProvider(*providers)


def build_usage_provider(
    config: SnifferConfig, *, usage_file: Optional[Path] = None
) -> UsageDataProvider:
    source = usage_file or config.usage.file
    if source is not None:
        return FileUsageProvider(source)
    return StaticUsageProvider(config.usage.values)


__all__ = [
    "TemplateAuditor",
    "build_catalog_provider",
    "build_usage_provider",
]
