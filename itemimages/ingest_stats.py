"""
IngestStats - Statistics for a batch ingest run.
"""

import time
from dataclasses import dataclass, field
from typing import List

from .image_version_set import ImageVersionSet


@dataclass
class IngestStats:
    """
    Statistics for a batch ingest run.
    
    Attributes:
        total_to_process: Number of source files in the batch
        processed: Successfully ingested
        errors: Failed to ingest
        bytes_written: Total bytes written across all three slots
        start_time: Start timestamp
        error_details: List of error messages
        results: Descriptors of the successful ingests, in input order
    """
    total_to_process: int = 0
    processed: int = 0
    errors: int = 0
    bytes_written: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)
    results: List[ImageVersionSet] = field(default_factory=list)
    
    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time
    
    @property
    def rate_per_second(self) -> float:
        """Processing rate in images per second."""
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds
        return 0.0
    
    @property
    def rate_per_minute(self) -> float:
        """Processing rate in images per minute."""
        return self.rate_per_second * 60
    
    @property
    def completed_count(self) -> int:
        """Total completed (processed + errors)."""
        return self.processed + self.errors
    
    @property
    def remaining_count(self) -> int:
        """Remaining to process."""
        return self.total_to_process - self.completed_count
    
    @property
    def estimated_remaining_seconds(self) -> float:
        """Estimated time remaining in seconds."""
        if self.rate_per_second > 0:
            return self.remaining_count / self.rate_per_second
        return 0.0
