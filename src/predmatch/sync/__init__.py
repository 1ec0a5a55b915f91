"""Refresh-cycle orchestration over the store."""

from predmatch.sync.pipeline import SyncResult, detect_batch, match_batch, run_sync, sync_status

__all__ = ["SyncResult", "detect_batch", "match_batch", "run_sync", "sync_status"]
