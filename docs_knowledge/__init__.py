"""Turn generated API documentation into per-package markdown knowledge."""

from .models import Knowledge, RunSummary, SourceKind
from .orchestrator import Orchestrator

__all__ = ["Knowledge", "Orchestrator", "RunSummary", "SourceKind"]
