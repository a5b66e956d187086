"""
ImageFormat - Container format classification for source images.
"""

import os
from enum import Enum
from typing import Optional

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
JPEG_SIGNATURE = b'\xff\xd8\xff'


class ImageFormat(Enum):
    """
    Container formats the pipeline distinguishes.
    
    Anything that is not PNG, JPEG or WEBP is UNKNOWN and is stored
    with a JPEG-family extension.
    """
    JPEG = 'JPEG'
    PNG = 'PNG'
    WEBP = 'WEBP'
    UNKNOWN = 'UNKNOWN'
    
    @property
    def extension(self) -> str:
        """Extension (without dot) used for the original slot."""
        if self is ImageFormat.PNG:
            return 'png'
        elif self is ImageFormat.WEBP:
            return 'webp'
        else:
            return 'jpg'
    
    @classmethod
    def sniff(cls, data: bytes) -> 'ImageFormat':
        """Classify by magic bytes."""
        if data.startswith(PNG_SIGNATURE):
            return cls.PNG
        if data.startswith(JPEG_SIGNATURE):
            return cls.JPEG
        if len(data) >= 12 and data[0:4] == b'RIFF' and data[8:12] == b'WEBP':
            return cls.WEBP
        return cls.UNKNOWN
    
    @classmethod
    def from_extension(cls, filename: str) -> 'ImageFormat':
        """Classify by file extension (case-insensitive)."""
        ext = os.path.splitext(filename)[1].lower()
        return EXTENSION_FORMATS.get(ext, cls.UNKNOWN)
    
    @classmethod
    def classify(cls, data: bytes, filename: Optional[str] = None) -> 'ImageFormat':
        """
        Classify a source image.
        
        The magic bytes win; the extension is only consulted when the
        bytes are not recognized.
        
        Args:
            data: Raw source bytes
            filename: Optional source filename
            
        Returns:
            The detected format, UNKNOWN if neither source is conclusive
        """
        detected = cls.sniff(data)
        if detected is cls.UNKNOWN and filename:
            detected = cls.from_extension(filename)
        return detected


EXTENSION_FORMATS = {
    '.png': ImageFormat.PNG,
    '.jpg': ImageFormat.JPEG,
    '.jpeg': ImageFormat.JPEG,
    '.jpe': ImageFormat.JPEG,
    '.webp': ImageFormat.WEBP,
}
