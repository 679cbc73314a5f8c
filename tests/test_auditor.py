"""Tests for the end-to-end template audit."""

from __future__ import annotations

from pathlib import Path

from sniffer.analyzers.coverage import NOTE_CHILD_OVERRIDES, NOTE_PARENT_FALLBACK
from sniffer.auditor import TemplateAuditor, build_catalog_provider, build_usage_provider
from sniffer.catalog import FileUsageProvider, StaticCatalogProvider, StaticUsageProvider
from sniffer.config import load_config
from sniffer.models import CatalogEntry
from tests._fixtures.theme_builder import ThemeBuilder


def test_audit_layered_theme(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php", "functions.php", "vendor/autoload.php"])
    theme_builder.write_parent(["index.php", "single.php", "parts/header.php"])

    report = TemplateAuditor().audit(
        theme_builder.scan_config(core_names=("index.php", "single.php"))
    )

    index, single = report.coverage
    assert index.notes == (NOTE_CHILD_OVERRIDES,)
    assert single.notes == (NOTE_PARENT_FALLBACK,)
    assert report.has_parent is True
    assert report.overrides.overrides == {"index.php"}
    assert report.overrides.parent_only == {"single.php", "parts/header.php"}
    assert report.misc.child_misc == {"functions.php"}
    assert report.misc.parent_misc == {"parts/header.php"}
    assert report.child_files == {"index.php", "functions.php"}


def test_audit_without_parent_compares_child_with_itself(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php", "page.php", "inc/setup.php"])

    report = TemplateAuditor().audit(
        theme_builder.scan_config(with_parent=False, core_names=("index.php", "single.php"))
    )

    assert report.has_parent is False
    assert report.parent_root is None
    assert [(e.in_child, e.in_parent) for e in report.coverage] == [(True, True), (False, False)]
    assert report.overrides.overrides == frozenset()
    assert report.overrides.parent_only == frozenset()
    assert report.misc.parent_misc == report.misc.child_misc == {"page.php", "inc/setup.php"}


def test_audit_empty_child_and_no_parent(theme_builder: ThemeBuilder) -> None:
    report = TemplateAuditor().audit(theme_builder.scan_config(with_parent=False))

    assert report.coverage
    assert all(not e.in_child and not e.in_parent for e in report.coverage)
    assert report.misc.child_misc == frozenset()
    assert report.misc.parent_misc == frozenset()
    assert report.overrides.overrides == frozenset()
    assert report.overrides.parent_only == frozenset()


def test_audit_missing_parent_directory_is_empty_layer(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php"])

    report = TemplateAuditor().audit(theme_builder.scan_config(core_names=("index.php",)))

    assert report.has_parent is True
    assert report.coverage[0].in_parent is False
    assert report.overrides.overrides == frozenset()
    assert report.skipped == []


def test_audit_reconciles_usage(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php", "templates/full-width.php"])

    report = TemplateAuditor().audit(
        theme_builder.scan_config(with_parent=False),
        StaticCatalogProvider({"Full Width": "templates/full-width.php", "Landing": "default"}),
        StaticUsageProvider(
            ["templates/full-width.php", "templates/full-width.php", "templates/old.php"]
        ),
    )

    assert report.usage.unused == ()
    assert report.usage.missing_from_disk == ("templates/old.php",)
    assert report.catalog[1] == CatalogEntry(name="Landing", path="default")


def test_audit_parallel_matches_sequential(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php", "a.php", "parts/x.php"])
    theme_builder.write_parent(["index.php", "b.php"])
    scan = theme_builder.scan_config()

    sequential = TemplateAuditor().audit(scan)
    parallel = TemplateAuditor(parallel=True).audit(scan)

    assert parallel.to_dict() == sequential.to_dict()


def test_audit_from_config_builds_providers(tmp_path: Path) -> None:
    child = tmp_path / "child"
    (child / "tpl").mkdir(parents=True)
    (child / "index.php").write_text("<?php\n", encoding="utf-8")
    (child / "tpl" / "wide.php").write_text("<?php /* Template Name: Wide */\n", encoding="utf-8")
    (tmp_path / "used.txt").write_text("tpl/gone.php\n", encoding="utf-8")
    (tmp_path / ".sniffer.yml").write_text(
        "child_root: child\ncatalog:\n  Landing: default\nusage:\n  file: used.txt\n",
        encoding="utf-8",
    )

    report = TemplateAuditor().audit_from_config(load_config(tmp_path))

    assert [entry.name for entry in report.catalog] == ["Landing", "Wide"]
    assert [entry.path for entry in report.usage.unused] == ["tpl/wide.php"]
    assert report.usage.missing_from_disk == ("tpl/gone.php",)


def test_build_usage_provider_prefers_explicit_file(tmp_path: Path) -> None:
    (tmp_path / ".sniffer.yml").write_text("usage:\n  values: [a.php]\n", encoding="utf-8")
    config = load_config(tmp_path)

    assert list(build_usage_provider(config).get_used_values()) == ["a.php"]
    explicit = build_usage_provider(config, usage_file=tmp_path / "used.txt")
    assert isinstance(explicit, FileUsageProvider)


def test_build_catalog_provider_without_sources_is_empty(tmp_path: Path) -> None:
    (tmp_path / ".sniffer.yml").write_text("catalog_from_headers: false\n", encoding="utf-8")
    config = load_config(tmp_path)

    provider = build_catalog_provider(config, config.scan_config())

    assert list(provider.get_catalog()) == []


def test_report_to_dict_is_sorted(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["z.php", "a.php", "m/n.php"])

    payload = TemplateAuditor().audit(theme_builder.scan_config(with_parent=False)).to_dict()

    assert payload["child_misc"] == ["a.php", "m/n.php", "z.php"]
    assert payload["overrides"] == []
    assert payload["block_templates"] == {"count": 0, "paths": []}


def test_audit_reads_theme_names_from_stylesheets(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child({"style.css": "/*\nTheme Name: Storefront Child\nTemplate: parent\n*/\n"})
    theme_builder.write_parent({"style.css": "/*\nTheme Name: Storefront\nVersion: 4.5\n*/\n"})

    payload = TemplateAuditor().audit(theme_builder.scan_config()).to_dict()

    assert payload["child_theme_name"] == "Storefront Child"
    assert payload["parent_theme_name"] == "Storefront"


def test_audit_theme_name_falls_back_to_directory(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php"])

    report = TemplateAuditor().audit(theme_builder.scan_config(with_parent=False))

    assert report.child_theme_name == "child"
    assert report.parent_theme_name is None
