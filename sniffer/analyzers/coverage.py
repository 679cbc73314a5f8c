"""Analyzer that reports core template presence across theme layers."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import AbstractSet, List, Sequence, Tuple

from ..models import CoverageEntry

MANDATORY_TEMPLATE_STEM = "index"

NOTE_MANDATORY_MISSING = "This is mandatory. If it is truly missing, the theme is broken."
NOTE_GENERIC_FALLBACK = "Missing. WordPress will fall back to a more generic template."
NOTE_CHILD_OVERRIDES = "Child theme overrides parent version."
NOTE_CHILD_ONLY = "Only present in child theme."
NOTE_PARENT_FALLBACK = "Only present in parent. Child falls back to this."

SEVERITY_CRITICAL = "critical"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"


class CoreCoverageAnalyzer:
    """Checks every expected core template against the child and parent file sets."""

    def analyze(
        self,
        child_set: AbstractSet[str],
        parent_set: AbstractSet[str],
        core_names: Sequence[str],
    ) -> List[CoverageEntry]:
        entries: List[CoverageEntry] = []
        for name in core_names:
            in_child = name in child_set
            in_parent = name in parent_set
            notes, severity = self._notes_for(name, in_child, in_parent)
            entries.append(
                CoverageEntry(
                    name=name,
                    in_child=in_child,
                    in_parent=in_parent,
                    notes=notes,
                    severity=severity,
                )
            )
        return entries

    @staticmethod
    def _notes_for(name: str, in_child: bool, in_parent: bool) -> Tuple[Tuple[str, ...], str]:
        if not in_child and not in_parent:
            if is_mandatory_template(name):
                return (NOTE_MANDATORY_MISSING,), SEVERITY_CRITICAL
            return (NOTE_GENERIC_FALLBACK,), SEVERITY_WARNING
        if in_child and in_parent:
            return (NOTE_CHILD_OVERRIDES,), SEVERITY_INFO
        if in_child:
            return (NOTE_CHILD_ONLY,), SEVERITY_INFO
        return (NOTE_PARENT_FALLBACK,), SEVERITY_INFO


def is_mandatory_template(name: str) -> bool:
    """Return True for the template every theme must ship (``index`` with any extension)."""
    return PurePosixPath(name).stem == MANDATORY_TEMPLATE_STEM and "/" not in name


__all__ = ["CoreCoverageAnalyzer", "is_mandatory_template"]
