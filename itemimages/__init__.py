"""
Image versioning for inventory item photographs.

One ingest turns a source photograph into three stored files sharing one
identifier:
    original-<id>.<ext>   archival copy (verbatim, or JPEG q95 for PNG/large sources)
    display-<id>.jpg      mid-resolution JPEG
    thumb-<id>.jpg        small JPEG

Triplets can be deleted best-effort, and an images directory can be measured.
"""

__version__ = "1.0.0"

from .exceptions import ImageVersionError, DecodeError, EncodeError, FilesystemError
from .image_format import ImageFormat
from .image_config import ImageConfig
from .source_image import SourceImage, decode_source
from .resizer import resize_to_width
from .encoder import JpegEncoder
from .asset_names import AssetNames
from .local_store import LocalStore, AppDirectories
from .image_version_set import ImageVersionSet
from .ingest_stats import IngestStats
from .ingest_progress import IngestProgress
from .versioner import (
    ImageVersioner,
    process_image,
    delete_image_versions,
    get_total_images_size,
)

__all__ = [
    "ImageVersionError",
    "DecodeError",
    "EncodeError",
    "FilesystemError",
    "ImageFormat",
    "ImageConfig",
    "SourceImage",
    "decode_source",
    "resize_to_width",
    "JpegEncoder",
    "AssetNames",
    "LocalStore",
    "AppDirectories",
    "ImageVersionSet",
    "IngestStats",
    "IngestProgress",
    "ImageVersioner",
    "process_image",
    "delete_image_versions",
    "get_total_images_size",
]
