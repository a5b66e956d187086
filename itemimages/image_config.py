"""
ImageConfig - Size and quality policy for one ingest call.
"""

import os
from dataclasses import dataclass, replace
from typing import List

MIB = 1024 * 1024


@dataclass(frozen=True)
class ImageConfig:
    """
    Immutable size and quality policy.
    
    There is no shared default instance; build one with ``ImageConfig()``,
    ``ImageConfig.from_env()`` or ``replace()`` and pass it explicitly.
    
    Attributes:
        display_max_width: Maximum width of the display version (pixels)
        thumbnail_max_width: Maximum width of the thumbnail (pixels)
        display_quality: JPEG quality for the display version (1-100)
        thumbnail_quality: JPEG quality for the thumbnail (1-100)
        original_quality: JPEG quality when the original is re-encoded (1-100)
        reencode_threshold_bytes: Sources this large or larger are re-encoded
        reencode_png: Whether PNG sources are always re-encoded
    """
    display_max_width: int = 1200
    thumbnail_max_width: int = 300
    display_quality: int = 85
    thumbnail_quality: int = 75
    original_quality: int = 95
    reencode_threshold_bytes: int = 10 * MIB
    reencode_png: bool = True
    
    ENV_PREFIX = 'ITEMIMAGES_'
    
    @classmethod
    def from_env(cls) -> 'ImageConfig':
        """Create configuration from ITEMIMAGES_* environment variables."""
        defaults = cls()
        
        def env_int(name: str, default: int) -> int:
            value = os.getenv(cls.ENV_PREFIX + name)
            if value is None or value.strip() == '':
                return default
            return int(value)
        
        return cls(
            display_max_width=env_int('DISPLAY_MAX_WIDTH', defaults.display_max_width),
            thumbnail_max_width=env_int('THUMBNAIL_MAX_WIDTH', defaults.thumbnail_max_width),
            display_quality=env_int('DISPLAY_QUALITY', defaults.display_quality),
            thumbnail_quality=env_int('THUMBNAIL_QUALITY', defaults.thumbnail_quality),
            original_quality=env_int('ORIGINAL_QUALITY', defaults.original_quality),
            reencode_threshold_bytes=env_int(
                'REENCODE_THRESHOLD_BYTES', defaults.reencode_threshold_bytes
            ),
        )
    
    def replace(self, **changes) -> 'ImageConfig':
        """Return a copy with the given fields changed."""
        return replace(self, **changes)
    
    def validate(self) -> List[str]:
        """
        Validate configuration.
        
        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        
        for name in ('display_max_width', 'thumbnail_max_width'):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                errors.append(f"{name} must be a positive integer (got {value!r})")
        
        for name in ('display_quality', 'thumbnail_quality', 'original_quality'):
            value = getattr(self, name)
            if not isinstance(value, int) or not 1 <= value <= 100:
                errors.append(f"{name} must be between 1 and 100 (got {value!r})")
        
        if not isinstance(self.reencode_threshold_bytes, int) or self.reencode_threshold_bytes < 0:
            errors.append(
                f"reencode_threshold_bytes must be >= 0 (got {self.reencode_threshold_bytes!r})"
            )
        
        return errors
