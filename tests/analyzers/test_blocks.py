"""Tests for block template counting."""

from __future__ import annotations

from sniffer.analyzers.blocks import BlockTemplateCounter
from tests._fixtures.theme_builder import ThemeBuilder


def test_counts_html_directly_under_block_dirs(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(
        [
            "templates/index.html",
            "templates/single.html",
            "parts/header.html",
            "parts/nested/footer.html",
            "templates/readme.txt",
            "index.html",
        ]
    )

    report = BlockTemplateCounter().count(theme_builder.child, None, has_parent=False)

    assert report.count == 3
    assert all(path.endswith(".html") for path in report.paths)


def test_includes_parent_only_when_layered(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["templates/index.html"])
    theme_builder.write_parent(["templates/index.html", "parts/footer.html"])

    layered = BlockTemplateCounter().count(theme_builder.child, theme_builder.parent, has_parent=True)
    single = BlockTemplateCounter().count(theme_builder.child, theme_builder.parent, has_parent=False)

    assert layered.count == 3
    assert single.count == 1


def test_same_root_is_counted_once(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["templates/index.html"])

    report = BlockTemplateCounter().count(theme_builder.child, theme_builder.child, has_parent=True)

    assert report.count == 1


def test_classic_theme_has_no_block_templates(theme_builder: ThemeBuilder) -> None:
    theme_builder.write_child(["index.php"])

    assert BlockTemplateCounter().count(theme_builder.child, None, has_parent=False).count == 0
