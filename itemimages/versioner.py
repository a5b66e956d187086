"""
ImageVersioner - Turns one source photograph into an original/display/thumbnail triplet.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from PIL import Image

from .asset_names import AssetNames
from .encoder import JpegEncoder
from .exceptions import ImageVersionError
from .image_config import ImageConfig
from .image_format import ImageFormat
from .image_version_set import ImageVersionSet
from .ingest_progress import IngestProgress
from .ingest_stats import IngestStats
from .local_store import LocalStore
from .resizer import resize_to_width
from .source_image import SourceImage, decode_source


class ImageVersioner:
    """
    Ingests source images into a destination directory.
    
    The source is decoded once. The original slot is either a verbatim copy
    or a high-quality JPEG re-encode; display and thumbnail are resized
    independently from the decoded pixels and encoded as JPEG. All three are
    staged under temporary names and only renamed into place once every
    write succeeded.
    """
    
    def __init__(
        self,
        store: Optional[LocalStore] = None,
        encoder: Optional[JpegEncoder] = None,
        parallel_encode: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize versioner.
        
        Args:
            store: Filesystem store (default: LocalStore)
            encoder: JPEG encoder (default: JpegEncoder)
            parallel_encode: Encode display and thumbnail on two threads
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.store = store or LocalStore(logger=self.logger)
        self.encoder = encoder or JpegEncoder(logger=self.logger)
        self.parallel_encode = parallel_encode
        self.stats = IngestStats()
        self._stop_requested = False
    
    def stop(self) -> None:
        """Request a running batch to stop after the current image."""
        self._stop_requested = True
    
    @staticmethod
    def should_reencode_original(source: SourceImage, config: ImageConfig) -> bool:
        """PNG sources and sources at or above the size threshold are re-encoded."""
        if config.reencode_png and source.format is ImageFormat.PNG:
            return True
        return source.byte_size >= config.reencode_threshold_bytes
    
    def ingest(self, source_path: str, dest_dir: str, config: ImageConfig) -> ImageVersionSet:
        """
        Create original, display and thumbnail versions of one image.
        
        Args:
            source_path: Path to the source image
            dest_dir: Directory the triplet is written to (created if missing)
            config: Size and quality policy
            
        Returns:
            ImageVersionSet describing the stored files
            
        Raises:
            ValueError: If config is invalid
            DecodeError: If the source is not an image; nothing is written
            EncodeError: If a version cannot be encoded; nothing is written
            FilesystemError: If reading, writing or committing fails
        """
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid image config: {'; '.join(errors)}")
        
        source_path = os.fspath(source_path)
        dest_dir = os.fspath(dest_dir)
        
        source = decode_source(source_path, logger=self.logger)
        
        reencode = self.should_reencode_original(source, config)
        original_ext = ImageFormat.JPEG.extension if reencode else source.format.extension
        names = AssetNames.allocate(original_ext)
        original_path, display_path, thumbnail_path = names.paths_in(dest_dir)
        
        base = self.encoder.flatten(source.image)
        display_data, thumbnail_data = self._encode_versions(base, config)
        original_data = self.encoder.encode(base, config.original_quality) if reencode else None
        
        self.store.ensure_directory(dest_dir)
        
        staged: List[Tuple[str, str]] = []
        try:
            if original_data is not None:
                self.logger.debug(f"Re-encoding original as JPEG q{config.original_quality}: {original_path}")
            else:
                self.logger.debug(f"Keeping original verbatim: {original_path}")
                original_data = source.data
            
            slots = (
                (original_path, original_data),
                (display_path, display_data),
                (thumbnail_path, thumbnail_data),
            )
            for final_path, data in slots:
                tmp_path = self.store.staging_path(final_path)
                staged.append((tmp_path, final_path))
                self.store.write_bytes(tmp_path, data)
        except BaseException:
            self.store.discard(tmp for tmp, _ in staged)
            raise
        
        file_size = len(original_data)
        
        self.store.commit(staged)
        
        result = ImageVersionSet(
            id=names.image_id,
            original_path=original_path,
            display_path=display_path,
            thumbnail_path=thumbnail_path,
            file_size=file_size,
            width=source.width,
            height=source.height,
        )
        self.logger.info(
            f"Ingested {source_path} -> {names.image_id} "
            f"({source.width}x{source.height}, original {file_size} bytes"
            f"{', re-encoded' if reencode else ''})"
        )
        return result
    
    def _encode_versions(self, base: Image.Image, config: ImageConfig) -> Tuple[bytes, bytes]:
        """Resize and encode the display and thumbnail versions from the same base."""
        jobs = (
            (config.display_max_width, config.display_quality),
            (config.thumbnail_max_width, config.thumbnail_quality),
        )
        
        if self.parallel_encode:
            with ThreadPoolExecutor(max_workers=2) as pool:
                futures = [pool.submit(self._encode_version, base, w, q) for w, q in jobs]
                display_data, thumbnail_data = [f.result() for f in futures]
        else:
            display_data, thumbnail_data = [self._encode_version(base, w, q) for w, q in jobs]
        
        return display_data, thumbnail_data
    
    def _encode_version(self, base: Image.Image, max_width: int, quality: int) -> bytes:
        resized = resize_to_width(base, max_width)
        self.logger.debug(f"Encoding {resized.size[0]}x{resized.size[1]} at q{quality}")
        return self.encoder.encode(resized, quality)
    
    def ingest_many(
        self,
        source_paths: Iterable[str],
        dest_dir: str,
        config: ImageConfig,
        progress: Optional[IngestProgress] = None
    ) -> IngestStats:
        """
        Ingest several images into one directory.
        
        A failure on one image is recorded and the batch continues.
        
        Args:
            source_paths: Source image paths
            dest_dir: Destination directory
            config: Size and quality policy, shared by every image
            progress: Optional progress tracker
            
        Returns:
            IngestStats with results
        """
        paths = list(source_paths)
        self.stats = IngestStats(total_to_process=len(paths))
        
        if self._stop_requested:
            self.logger.info("Stop was requested before ingest started")
            return self.stats
        
        self.logger.info(f"Starting ingest: {len(paths)} images into {dest_dir}")
        
        for source_path in paths:
            if self._stop_requested:
                self.logger.info("Stop requested, halting ingest")
                break
            
            try:
                result = self.ingest(source_path, dest_dir, config)
            except ImageVersionError as e:
                error_msg = f"Error processing {source_path}: {e}"
                self.logger.error(error_msg)
                self.stats.errors += 1
                self.stats.error_details.append(error_msg)
                if progress:
                    progress.on_file_processed(source_path, error=str(e))
            else:
                self.stats.processed += 1
                self.stats.results.append(result)
                self.stats.bytes_written += sum(os.path.getsize(p) for p in result.paths)
                if progress:
                    progress.on_file_processed(source_path, result=result)
            
            if progress:
                progress.on_progress_update(self.stats)
        
        self.logger.info(
            f"Ingest complete: {self.stats.processed} ingested, "
            f"{self.stats.errors} errors ({self.stats.elapsed_seconds:.1f}s)"
        )
        
        return self.stats


def process_image(source_path: str, dest_dir: str, config: ImageConfig) -> ImageVersionSet:
    """Ingest one image with a default LocalStore and JpegEncoder."""
    return ImageVersioner().ingest(source_path, dest_dir, config)


def delete_image_versions(original_path: str, display_path: str, thumbnail_path: str) -> List[str]:
    """Delete a triplet. Never raises; returns diagnostics for suppressed failures."""
    return LocalStore().delete_triplet(original_path, display_path, thumbnail_path)


def get_total_images_size(images_dir: str) -> int:
    """Total bytes of all files below images_dir, 0 if it does not exist."""
    return LocalStore().directory_size(images_dir)
