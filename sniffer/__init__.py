"""Template hierarchy auditing for layered (child/parent) themes."""

from .auditor import TemplateAuditor
from .config import ScanConfig, SnifferConfig, load_config
from .models import TemplateReport

__version__ = "1.0.0"

__all__ = ["ScanConfig", "SnifferConfig", "TemplateAuditor", "TemplateReport", "load_config"]
