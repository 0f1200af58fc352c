"""Sync pipeline."""

from .models import SyncResult
from .orchestrator import PipelineStage, SyncOrchestrator, sync_articles

__all__ = ["PipelineStage", "SyncOrchestrator", "SyncResult", "sync_articles"]
