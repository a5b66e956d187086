"""
AssetNames - Deterministic filenames for one image triplet.
"""

import os
import re
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

SLOT_ORIGINAL = 'original'
SLOT_DISPLAY = 'display'
SLOT_THUMBNAIL = 'thumbnail'

SLOTS = (SLOT_ORIGINAL, SLOT_DISPLAY, SLOT_THUMBNAIL)


@dataclass(frozen=True)
class AssetNames:
    """
    Filenames of the original, display and thumbnail slots for one ingest.
    
    Attributes:
        image_id: uuid4 string shared by the three files
        original_ext: Extension of the original slot (jpg, png or webp)
    """
    image_id: str
    original_ext: str = 'jpg'
    
    # Captures: (prefix, uuid, ext)
    NAME_PATTERN = re.compile(
        r'^(original|display|thumb)-'
        r'([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})'
        r'\.([A-Za-z0-9]+)$'
    )
    
    @classmethod
    def allocate(cls, original_ext: str = 'jpg') -> 'AssetNames':
        """Draw a fresh identifier."""
        return cls(image_id=str(uuid.uuid4()), original_ext=original_ext)
    
    @property
    def original(self) -> str:
        return f"original-{self.image_id}.{self.original_ext}"
    
    @property
    def display(self) -> str:
        return f"display-{self.image_id}.jpg"
    
    @property
    def thumbnail(self) -> str:
        return f"thumb-{self.image_id}.jpg"
    
    def filename(self, slot: str) -> str:
        """Filename for a slot name from SLOTS."""
        if slot == SLOT_ORIGINAL:
            return self.original
        elif slot == SLOT_DISPLAY:
            return self.display
        elif slot == SLOT_THUMBNAIL:
            return self.thumbnail
        raise ValueError(f"Unknown slot: {slot!r}")
    
    def paths_in(self, dest_dir: str) -> Tuple[str, str, str]:
        """Full (original, display, thumbnail) paths inside dest_dir."""
        return tuple(os.path.join(dest_dir, self.filename(slot)) for slot in SLOTS)
    
    @classmethod
    def parse(cls, filename: str) -> Optional[Tuple[str, str]]:
        """
        Recover the slot and identifier from a stored filename.
        
        Args:
            filename: Basename such as 'thumb-<uuid>.jpg'
            
        Returns:
            Tuple of (slot, image_id), or None if the name is not a slot file
        """
        match = cls.NAME_PATTERN.match(os.path.basename(filename))
        if not match:
            return None
        
        prefix, image_id, ext = match.groups()
        if prefix == 'original':
            return SLOT_ORIGINAL, image_id
        if ext.lower() != 'jpg':
            return None
        if prefix == 'display':
            return SLOT_DISPLAY, image_id
        return SLOT_THUMBNAIL, image_id
