"""
SourceImage - A decoded source photograph, alive for one ingest call.
"""

import io
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeError, FilesystemError
from .image_format import ImageFormat


@dataclass
class SourceImage:
    """
    Raw bytes and decoded pixels of one source image.
    
    Attributes:
        path: Where the bytes were read from
        data: Raw source bytes
        format: Detected container format
        image: Decoded Pillow image (first frame)
        width: Source width in pixels
        height: Source height in pixels
    """
    path: str
    data: bytes = field(repr=False)
    format: ImageFormat
    image: Image.Image = field(repr=False)
    width: int
    height: int
    
    @property
    def byte_size(self) -> int:
        """Length of the raw source in bytes."""
        return len(self.data)
    
    @classmethod
    def from_bytes(cls, data: bytes, path: str = '') -> 'SourceImage':
        """
        Decode raw bytes.
        
        Args:
            data: Raw image bytes
            path: Source filename, used for the extension fallback and messages
            
        Returns:
            SourceImage with fully loaded pixels
            
        Raises:
            DecodeError: If the bytes are not a parseable image
        """
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Cannot decode image {path or '<bytes>'}: {e}", path) from e
        except (OSError, SyntaxError, ValueError) as e:
            # Truncated or corrupt streams surface as OSError from the decoders
            raise DecodeError(f"Corrupt image {path or '<bytes>'}: {e}", path) from e
        
        width, height = img.size
        return cls(
            path=path,
            data=data,
            format=ImageFormat.classify(data, path),
            image=img,
            width=width,
            height=height,
        )


def decode_source(path: str, logger: Optional[logging.Logger] = None) -> SourceImage:
    """
    Read and decode a source image file.
    
    Raises:
        FilesystemError: If the file cannot be read
        DecodeError: If the file is not a parseable image
    """
    logger = logger or logging.getLogger(__name__)
    path = os.fspath(path)
    
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise FilesystemError(f"Cannot read source image {path}: {e}", path) from e
    
    source = SourceImage.from_bytes(data, path)
    logger.debug(
        f"Decoded {path}: {source.format.value} {source.width}x{source.height} "
        f"({source.byte_size} bytes)"
    )
    return source
