"""Classifier for template files that are not root-level core templates."""

from __future__ import annotations

from typing import AbstractSet, Iterable

from ..models import FileSet, MiscReport


class MiscClassifier:
    """Collects every file that is not a core template sitting at the layer root."""

    def classify(self, file_set: Iterable[str], core_names: Iterable[str]) -> FileSet:
        core = frozenset(core_names)
        return frozenset(path for path in file_set if not is_core_template(path, core))

    def analyze(
        self,
        child_set: AbstractSet[str],
        parent_set: AbstractSet[str],
        core_names: Iterable[str],
    ) -> MiscReport:
        names = frozenset(core_names)
        return MiscReport(
            child_misc=self.classify(child_set, names),
            parent_misc=self.classify(parent_set, names),
        )


def is_core_template(path: str, core_names: AbstractSet[str]) -> bool:
    # Core only at the root: parts/index.php is still miscellaneous.
    return "/" not in path and path in core_names


__all__ = ["MiscClassifier", "is_core_template"]
