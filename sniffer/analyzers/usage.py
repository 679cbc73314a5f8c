"""Reconciles the declared template catalog with the values content actually uses."""

from __future__ import annotations

from typing import Dict, Sequence

from ..models import DEFAULT_TEMPLATE_SENTINEL, CatalogEntry, UsageReport


class UsageReconciler:
    """Finds unused catalog templates and used values with no catalog entry.

    Both inputs come from external collaborators; nothing here touches the
    filesystem. The ``"default"`` sentinel means "use the generic fallback" and
    is ignored on both sides.
    """

    def reconcile(
        self,
        catalog: Sequence[CatalogEntry],
        used_values: Sequence[str],
    ) -> UsageReport:
        used = set(used_values)
        unused = tuple(
            entry
            for entry in catalog
            if entry.path != DEFAULT_TEMPLATE_SENTINEL and entry.path not in used
        )

        available = {entry.path for entry in catalog}
        missing: Dict[str, None] = {}
        for value in used_values:
            if value == DEFAULT_TEMPLATE_SENTINEL or value in available:
                continue
            missing.setdefault(value, None)

        return UsageReport(unused=unused, missing_from_disk=tuple(missing))


__all__ = ["UsageReconciler"]
