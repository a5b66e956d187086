"""
LocalStore - Filesystem operations for image triplets.
"""

import logging
import os
from typing import Iterable, List, Optional, Sequence, Tuple

from .asset_names import AssetNames, SLOTS
from .exceptions import FilesystemError

STAGING_SUFFIX = '.partial'


class LocalStore:
    """
    Reads, writes, deletes and measures files on the local filesystem.
    
    Every OSError raised by a write-side operation is re-raised as
    FilesystemError naming the offending path.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize store.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
    
    def ensure_directory(self, path: str) -> None:
        """Create path and any missing parents."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create directory {path}: {e}", path) from e
    
    def write_bytes(self, path: str, data: bytes) -> int:
        """Write data to path, returning the number of bytes written."""
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise FilesystemError(f"Cannot write {path}: {e}", path) from e
        return len(data)
    
    @staticmethod
    def staging_path(path: str) -> str:
        """Hidden sibling name a slot is written to before it is committed."""
        dirname, filename = os.path.split(path)
        return os.path.join(dirname, f".{filename}{STAGING_SUFFIX}")
    
    def commit(self, staged: Sequence[Tuple[str, str]]) -> None:
        """
        Move staged files to their final names.
        
        Args:
            staged: (staging_path, final_path) pairs
            
        Raises:
            FilesystemError: If a rename fails. Finals committed so far and
                the remaining staged files are removed before raising.
        """
        committed: List[str] = []
        for index, (tmp_path, final_path) in enumerate(staged):
            try:
                os.replace(tmp_path, final_path)
            except OSError as e:
                self.logger.error(f"Commit failed for {final_path}: {e}")
                leftovers = committed + [tmp for tmp, _ in staged[index:]]
                self.discard(leftovers)
                raise FilesystemError(f"Cannot move {tmp_path} to {final_path}: {e}", final_path) from e
            except BaseException:
                self.discard(committed + [tmp for tmp, _ in staged[index:]])
                raise
            committed.append(final_path)
    
    def discard(self, paths: Iterable[str]) -> None:
        """Best-effort removal of temporaries after a failed ingest."""
        for path in paths:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                self.logger.warning(f"Could not remove {path}: {e}")
    
    def delete_triplet(
        self,
        original_path: str,
        display_path: str,
        thumbnail_path: str
    ) -> List[str]:
        """
        Delete all three versions of an image.
        
        Each file is removed independently. Missing files are fine and any
        other failure is logged and reported, never raised.
        
        Returns:
            Diagnostic messages for removals that failed (empty on success)
        """
        problems = []
        for path in (original_path, display_path, thumbnail_path):
            try:
                os.remove(path)
                self.logger.debug(f"Deleted {path}")
            except FileNotFoundError:
                continue
            except OSError as e:
                message = f"Could not delete {path}: {e}"
                self.logger.warning(message)
                problems.append(message)
        return problems
    
    def directory_size(self, root: str) -> int:
        """
        Total size in bytes of all regular files below root.
        
        A missing root counts as empty. Symlinks are not followed.
        
        Raises:
            FilesystemError: If any directory or entry cannot be read
        """
        try:
            return self._directory_size(os.fspath(root))
        except FileNotFoundError as e:
            if e.filename is not None and os.fspath(e.filename) == os.fspath(root):
                return 0
            raise FilesystemError(f"Entry vanished while measuring {root}: {e}", e.filename) from e
        except OSError as e:
            raise FilesystemError(f"Cannot measure {root}: {e}", e.filename) from e
    
    def _directory_size(self, path: str) -> int:
        total = 0
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    total += self._directory_size(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
        return total
    
    def find_triplet(self, dest_dir: str, image_id: str) -> Optional[Tuple[str, str, str]]:
        """
        Locate the stored files of one identifier.
        
        Returns:
            (original, display, thumbnail) paths, or None if no slot file exists.
            Paths of slots that are missing are still returned.
        """
        found = {}
        try:
            with os.scandir(dest_dir) as entries:
                for entry in entries:
                    parsed = AssetNames.parse(entry.name)
                    if parsed and parsed[1] == image_id:
                        found[parsed[0]] = entry.path
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FilesystemError(f"Cannot list {dest_dir}: {e}", dest_dir) from e
        
        if not found:
            return None
        
        defaults = AssetNames(image_id).paths_in(dest_dir)
        return tuple(found.get(slot, default) for slot, default in zip(SLOTS, defaults))


class AppDirectories:
    """
    Standard directories below an application data directory.
    
    Each directory is created when first asked for.
    """
    
    def __init__(self, base_dir: str, store: Optional[LocalStore] = None):
        self.base_dir = base_dir
        self.store = store or LocalStore()
    
    def _subdir(self, name: str) -> str:
        path = os.path.join(self.base_dir, name)
        self.store.ensure_directory(path)
        return path
    
    @property
    def images_dir(self) -> str:
        return self._subdir('images')
    
    @property
    def exports_dir(self) -> str:
        return self._subdir('exports')
    
    @property
    def backups_dir(self) -> str:
        return self._subdir('backups')
