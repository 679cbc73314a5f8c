from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.theme_builder import ThemeBuilder


@pytest.fixture
def theme_builder(tmp_path: Path) -> ThemeBuilder:
    """Provide a reusable child/parent theme builder rooted at the pytest tmp_path."""
    return ThemeBuilder(tmp_path)
