"""Analyzers that turn layer file sets and catalog data into report fragments."""

from __future__ import annotations

from .blocks import BlockTemplateCounter
from .coverage import CoreCoverageAnalyzer
from .misc import MiscClassifier
from .overrides import OverrideAnalyzer
from .usage import UsageReconciler

__all__ = [
    "BlockTemplateCounter",
    "CoreCoverageAnalyzer",
    "MiscClassifier",
    "OverrideAnalyzer",
    "UsageReconciler",
]
