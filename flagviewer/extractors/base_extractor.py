# ==============================================================================
# BASE EXTRACTOR MODULE
# ==============================================================================
# Abstract base class for archive extractors, plus the path-safety checks
# every extractor must apply before writing an entry to disk.
#
# Archives are opened from an in-memory buffer: the flag archive is read
# out of the application and never exists as a file of its own.
#
# To support a new archive format:
#   1. Create a new extractor class that inherits from BaseExtractor
#   2. Implement all abstract methods
# ==============================================================================

import os
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Callable
from dataclasses import dataclass

from ..core.errors import UnsafeEntryPath, ExtractionIOError


# Drive-letter prefix such as "C:" or "c:/"
_DRIVE_RE = re.compile(r'^[A-Za-z]:')


# ==============================================================================
# ARCHIVE ENTRY DATA CLASS
# ==============================================================================
@dataclass
class ArchiveEntry:
    """
    Represents an entry within an archive.

    Attributes:
        path (str):            Relative path within the archive, '/' separated
        size (int):            Uncompressed size
        compressed_size (int): Compressed size (may equal size if stored)
        is_dir (bool):         Whether the entry is a directory
    """
    path: str
    size: int
    compressed_size: int = 0
    is_dir: bool = False

    def __post_init__(self):
        if self.compressed_size == 0:
            self.compressed_size = self.size


# ==============================================================================
# PATH SAFETY
# ==============================================================================

def normalize_entry_path(name: str) -> str:
    """
    Normalize an archive entry name and reject unsafe ones.

    Backslashes are treated as separators and empty or '.' segments are
    dropped. A trailing '/' (directory entry) is preserved.

    Args:
        name: Entry name as stored in the archive

    Returns:
        The normalized relative path

    Raises:
        UnsafeEntryPath: Absolute path, drive letter, '..' segment or
                         empty name
    """
    path = name.replace('\\', '/')

    if path.startswith('/') or _DRIVE_RE.match(path):
        raise UnsafeEntryPath(name, f"Absolute path in archive: {name!r}")

    parts = [part for part in path.split('/') if part not in ('', '.')]
    if '..' in parts:
        raise UnsafeEntryPath(name, f"Parent directory reference in archive: {name!r}")
    if not parts:
        raise UnsafeEntryPath(name, f"Empty path in archive: {name!r}")

    normalized = '/'.join(parts)
    if path.endswith('/'):
        normalized += '/'
    return normalized


def safe_join(output_dir: str, entry_path: str) -> str:
    """
    Build the destination path for an entry, refusing to leave output_dir.

    Symlinks already present under output_dir are resolved before the
    containment check.

    Raises:
        UnsafeEntryPath: The target resolves outside output_dir
    """
    relative = normalize_entry_path(entry_path).rstrip('/')
    target = os.path.join(output_dir, *relative.split('/'))

    real_root = os.path.realpath(output_dir)
    real_target = os.path.realpath(target)
    if os.path.commonpath([real_root, real_target]) != real_root or real_target == real_root:
        raise UnsafeEntryPath(entry_path, f"Entry escapes destination: {entry_path!r}")

    return target


# ==============================================================================
# BASE EXTRACTOR ABSTRACT CLASS
# ==============================================================================
class BaseExtractor(ABC):
    """
    Abstract base class for in-memory archive extractors.

    The typical workflow is:
        1. Create extractor instance
        2. Open an archive buffer with open()
        3. List entries with list_files()
        4. Extract with extract_all() or extract_file()
        5. Close with close()

    Or use as a context manager:
        with ZipExtractor(data) as ext:
            ext.extract_all("output/")
    """

    def __init__(self, buffer: Optional[bytes] = None):
        self._is_open = False
        self._file_list: List[ArchiveEntry] = []

        if buffer is not None:
            self.open(buffer)

    # ==========================================================================
    # ABSTRACT PROPERTIES
    # ==========================================================================

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable name of the archive format (e.g. "ZIP")."""
        pass

    # ==========================================================================
    # ABSTRACT METHODS
    # ==========================================================================

    @abstractmethod
    def detect(self, buffer: bytes) -> bool:
        """Check the buffer's signature to see if this extractor applies."""
        pass

    @abstractmethod
    def open(self, buffer: bytes, validate: bool = True):
        """
        Parse an archive held in memory.

        Should populate self._file_list with ArchiveEntry objects in
        archive order.

        Args:
            buffer: Raw archive bytes
            validate: Reject unsafe entry paths while parsing

        Raises:
            ArchiveCorrupt: The buffer cannot be parsed
            UnsafeEntryPath: validate is set and an entry path is unsafe
        """
        pass

    @abstractmethod
    def close(self):
        pass

    @abstractmethod
    def extract_file(self, entry_path: str, output_path: str):
        """
        Decompress one entry and write it to output_path.

        Raises:
            ArchiveCorrupt: The entry data cannot be decoded
            ExtractionIOError: Writing output_path failed
        """
        pass

    @abstractmethod
    def get_file_data(self, entry_path: str) -> Optional[bytes]:
        """
        Get the decompressed bytes of an entry without writing to disk.

        Returns:
            Entry contents, or None if the entry does not exist
        """
        pass

    # ==========================================================================
    # COMMON METHODS
    # ==========================================================================

    def list_files(self) -> List[ArchiveEntry]:
        """Get all entries in archive order."""
        return list(self._file_list)

    def extract_all(self, output_dir: str,
                    progress_callback: Callable[[int, int, str], None] = None) -> int:
        """
        Extract every entry into output_dir, preserving relative paths.

        Stops at the first failure; entries already written are left in
        place for the caller to clean up.

        Args:
            output_dir: Existing directory to extract into
            progress_callback: Optional callback(current, total, entry_path)

        Returns:
            Number of entries extracted (files and directories)

        Raises:
            UnsafeEntryPath: An entry would land outside output_dir
            ArchiveCorrupt: An entry cannot be decoded
            ExtractionIOError: A write failed
        """
        if not self._is_open:
            raise RuntimeError("Archive is not open")
        if not os.path.isdir(output_dir):
            raise ExtractionIOError(f"Destination is not a directory: {output_dir}")

        files = self.list_files()
        total = len(files)

        # Every target is checked before the first byte is written
        targets = [safe_join(output_dir, entry.path) for entry in files]

        for idx, (entry, target) in enumerate(zip(files, targets)):
            if progress_callback:
                progress_callback(idx + 1, total, entry.path)

            try:
                if entry.is_dir:
                    os.makedirs(target, exist_ok=True)
                    continue
                os.makedirs(os.path.dirname(target), exist_ok=True)
            except OSError as e:
                raise ExtractionIOError(f"Unable to create directory for {entry.path}: {e}") from e

            self.extract_file(entry.path, target)

        return total

    def get_file_count(self) -> int:
        """Get the total number of entries in the archive."""
        return len(self._file_list)

    def get_total_size(self) -> int:
        """Get the total uncompressed size of all entries."""
        return sum(entry.size for entry in self._file_list)

    # ==========================================================================
    # CONTEXT MANAGER SUPPORT
    # ==========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
