"""
IngestProgress - Tracks and displays batch ingest progress.
"""

import logging
import os
from typing import Optional

from .image_version_set import ImageVersionSet, format_bytes
from .ingest_stats import IngestStats


class IngestProgress:
    """
    Tracks and displays ingest progress with optional per-file output.
    """
    
    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.
        
        Args:
            show_files: If True, print each file as it's processed
            log_interval: Log summary progress every N images (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0
    
    def on_file_processed(
        self,
        source_path: str,
        result: Optional[ImageVersionSet] = None,
        error: Optional[str] = None
    ) -> None:
        """
        Called when a source file is processed.
        
        Args:
            source_path: The source image path
            result: Descriptor of the stored triplet (if success)
            error: Error message (if failed)
        """
        if not self.show_files:
            return
        
        name = os.path.basename(source_path)
        if result is not None:
            print(
                f"  [OK] {name} -> {result.id} "
                f"({result.width}x{result.height}, original {format_bytes(result.file_size)})"
            )
        else:
            print(f"  [ERROR] {name} -> {error or 'failed'}")
    
    def on_progress_update(self, stats: IngestStats) -> None:
        """
        Called after every file to report overall progress.
        
        Args:
            stats: Current ingest statistics
        """
        total_done = stats.completed_count
        
        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            
            eta_minutes = stats.estimated_remaining_seconds / 60
            
            self.logger.info(
                f"Progress: {stats.processed} ingested, {stats.errors} errors "
                f"({stats.rate_per_minute:.1f}/min, "
                f"~{eta_minutes:.0f}m remaining, {stats.remaining_count} left)"
            )
    
    def __call__(self, stats: IngestStats) -> None:
        """Allow use as callback for stats updates."""
        self.on_progress_update(stats)
