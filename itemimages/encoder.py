"""
JpegEncoder - Serializes decoded images to quality-parameterized JPEG.
"""

import io
import logging
from typing import Optional, Tuple

from PIL import Image

from .exceptions import EncodeError


class JpegEncoder:
    """
    Encodes images as JPEG using Pillow.

    Every image is flattened to RGB first; transparency is composited
    onto a solid background and then dropped.
    """

    def __init__(
        self,
        background: Tuple[int, int, int] = (255, 255, 255),
        optimize: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize encoder.

        Args:
            background: RGB color that replaces transparent pixels
            optimize: Pass Pillow's optimize flag (smaller files, slower)
            logger: Optional logger instance
        """
        self.background = background
        self.optimize = optimize
        self.logger = logger or logging.getLogger(__name__)

    def encode(self, img: Image.Image, quality: int) -> bytes:
        """
        Encode an image as JPEG.

        Args:
            img: Image in any Pillow mode
            quality: JPEG quality (1-100)

        Returns:
            JPEG bytes

        Raises:
            ValueError: If quality is out of range
            EncodeError: If Pillow fails to serialize the image
        """
        if not 1 <= quality <= 100:
            raise ValueError(f"JPEG quality must be between 1 and 100, got {quality}")

        rgb = self.flatten(img)
        output = io.BytesIO()
        try:
            rgb.save(output, format='JPEG', quality=quality, optimize=self.optimize)
        except (OSError, ValueError) as e:
            self.logger.error(f"Error encoding {rgb.size[0]}x{rgb.size[1]} image: {e}")
            raise EncodeError(f"JPEG encoding failed: {e}") from e

        return output.getvalue()

    def flatten(self, img: Image.Image) -> Image.Image:
        """
        Convert image to 3-channel RGB, compositing any alpha onto the background.

        Raises:
            EncodeError: If Pillow cannot convert the image mode
        """
        try:
            return self._convert_color_mode(img)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Cannot convert {img.mode} image to RGB: {e}") from e

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        if img.mode == 'RGB':
            return img

        if img.mode == 'P' and 'transparency' in img.info:
            img = img.convert('RGBA')
        elif img.mode in ('LA', 'PA', 'RGBa', 'La'):
            img = img.convert('RGBA')

        if img.mode == 'RGBA':
            background = Image.new('RGB', img.size, self.background)
            background.paste(img, mask=img.split()[-1])
            return background

        if img.mode.startswith('I;16') or img.mode in ('I', 'F'):
            img = self._to_8bit(img)

        return img.convert('RGB')

    @staticmethod
    def _to_8bit(img: Image.Image) -> Image.Image:
        """
        Rescale a single-channel integer or float image to mode L.

        Integer modes are treated as 16-bit samples. Float images with
        values no greater than 1.0 are treated as normalized.
        """
        if img.mode == 'F':
            _, high = img.getextrema()
            if high <= 1.0:
                scale = 255.0
            elif high > 255:
                scale = 1 / 256
            else:
                scale = 1.0
        else:
            img = img.convert('I')
            scale = 1 / 256

        return img.point(lambda v: v * scale).convert('L')
