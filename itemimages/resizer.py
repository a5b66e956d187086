"""
Width-bounded downscaling.
"""

from PIL import Image


def scaled_height(width: int, height: int, max_width: int) -> int:
    """Height that keeps the aspect ratio when width becomes max_width."""
    return max(1, round(height * max_width / width))


def resize_to_width(img: Image.Image, max_width: int) -> Image.Image:
    """
    Scale an image down to at most max_width pixels wide.
    
    Aspect ratio is preserved and the height is never capped on its own.
    Images already at or below max_width are returned unchanged; nothing
    is ever upscaled. The input image is not modified.
    
    Args:
        img: Decoded image
        max_width: Maximum output width in pixels
        
    Returns:
        The resized copy, or img itself when no resize is needed
    """
    if max_width < 1:
        raise ValueError(f"max_width must be positive, got {max_width}")
    
    width, height = img.size
    if width <= max_width:
        return img
    
    new_size = (max_width, scaled_height(width, height, max_width))
    return img.resize(new_size, Image.Resampling.LANCZOS)
