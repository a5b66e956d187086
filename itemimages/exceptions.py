"""
Exceptions raised by the image versioning pipeline.
"""

from typing import Optional


class ImageVersionError(Exception):
    """
    Base class for ingest failures.
    
    Attributes:
        path: The file or directory the failure relates to, if known
    """
    
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DecodeError(ImageVersionError):
    """Source bytes could not be parsed as an image. Raised before any write."""


class EncodeError(ImageVersionError):
    """A decoded image could not be serialized."""


class FilesystemError(ImageVersionError):
    """Directory creation, read, write, copy, rename or metadata failure."""
