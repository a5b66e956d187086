"""
ImageVersionSet - Descriptor of one stored image triplet.
"""

import os
from dataclasses import dataclass, asdict
from typing import Optional, Tuple


@dataclass(frozen=True)
class ImageVersionSet:
    """
    The three stored versions produced by one ingest.
    
    Attributes:
        id: Identifier shared by the three filenames
        original_path: Archival copy (verbatim or re-encoded JPEG)
        display_path: Mid-resolution JPEG
        thumbnail_path: Small JPEG
        file_size: Bytes written to the original slot
        width: Source width in pixels
        height: Source height in pixels
    """
    id: str
    original_path: str
    display_path: str
    thumbnail_path: str
    file_size: int
    width: int
    height: int
    
    @property
    def paths(self) -> Tuple[str, str, str]:
        """(original, display, thumbnail) paths."""
        return self.original_path, self.display_path, self.thumbnail_path
    
    @property
    def directory(self) -> str:
        return os.path.dirname(self.original_path)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: dict) -> 'ImageVersionSet':
        """Create from dictionary."""
        return cls(
            id=data['id'],
            original_path=data['original_path'],
            display_path=data['display_path'],
            thumbnail_path=data['thumbnail_path'],
            file_size=int(data['file_size']),
            width=int(data['width']),
            height=int(data['height']),
        )
    
    def format_status(self) -> str:
        """
        Format a human-readable status line.
        
        Returns:
            Status string like "original-<id>.jpg 4000x3000 (2.1 MB)"
        """
        filename = os.path.basename(self.original_path)
        return f"{filename} {self.width}x{self.height} ({format_bytes(self.file_size)})"


def format_bytes(bytes_val: Optional[int]) -> str:
    """Format bytes as human-readable string."""
    if bytes_val is None:
        return "unknown"
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} TB"
