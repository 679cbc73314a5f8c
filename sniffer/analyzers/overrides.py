"""Analyzer for child templates that shadow parent templates."""

from __future__ import annotations

from typing import AbstractSet

from ..models import OverrideReport


class OverrideAnalyzer:
    """Splits the layered file sets into overrides and parent-only templates."""

    def analyze(
        self,
        child_set: AbstractSet[str],
        parent_set: AbstractSet[str],
        has_parent: bool,
    ) -> OverrideReport:
        # Without a parent layer there is nothing to shadow, whatever the sets hold.
        if not has_parent:
            return OverrideReport()
        child = frozenset(child_set)
        parent = frozenset(parent_set)
        return OverrideReport(overrides=child & parent, parent_only=parent - child)


__all__ = ["OverrideAnalyzer"]
