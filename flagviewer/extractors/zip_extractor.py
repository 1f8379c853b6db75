# ==============================================================================
# ZIP EXTRACTOR MODULE
# ==============================================================================
# Extractor for ZIP archives held in memory.
#
# ZIP Format Overview:
#   - Local file headers, each followed by the entry's data
#   - Central directory listing every entry, at the end of the archive
#   - End Of Central Directory record pointing at the central directory
#
# Entries may be stored or deflate-compressed. Encrypted entries and other
# compression methods are reported as a corrupt archive, since the viewer
# has no way to use them.
#
# Usage:
#   count = ZipExtractor().extract(data, "output/")
#
#   with ZipExtractor(data) as zf:
#       for entry in zf.list_files():
#           print(entry.path, entry.size)
# ==============================================================================

import io
import os
import shutil
import struct
import zipfile
import zlib
from typing import Dict, List, Optional, Callable

from .base_extractor import BaseExtractor, ArchiveEntry, normalize_entry_path
from ..core.errors import ArchiveCorrupt, ExtractionIOError, UnsafeEntryPath


# ==============================================================================
# ZIP CONSTANTS
# ==============================================================================

# Signatures an archive may start with (an empty archive is just the EOCD)
ZIP_SIGNATURES = (b"PK\x03\x04", b"PK\x05\x06")

# Compression methods we can decode
SUPPORTED_METHODS = {
    zipfile.ZIP_STORED: "stored",
    zipfile.ZIP_DEFLATED: "deflate",
}

# General purpose flag bit 0: entry is encrypted
FLAG_ENCRYPTED = 0x1

# Errors zipfile/zlib raise for damaged data
CORRUPT_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, struct.error,
                  NotImplementedError, RuntimeError, ValueError)


# ==============================================================================
# ZIP EXTRACTOR CLASS
# ==============================================================================
class ZipExtractor(BaseExtractor):
    """
    ZIP extractor working on an in-memory buffer.

    Attributes:
        unsafe_entries (list): Entry names rejected by path validation
                               (only filled when opened with validate=False)
    """

    def __init__(self, buffer: Optional[bytes] = None):
        self._zip: Optional[zipfile.ZipFile] = None
        self._infos: Dict[str, zipfile.ZipInfo] = {}
        self.unsafe_entries: List[str] = []
        super().__init__(buffer)

    # ==========================================================================
    # PROPERTIES
    # ==========================================================================

    @property
    def format_name(self) -> str:
        return "ZIP"

    # ==========================================================================
    # DETECTION
    # ==========================================================================

    def detect(self, buffer: bytes) -> bool:
        return bytes(buffer[:4]) in ZIP_SIGNATURES

    # ==========================================================================
    # OPEN / CLOSE
    # ==========================================================================

    def open(self, buffer: bytes, validate: bool = True):
        """
        Parse the central directory of an in-memory ZIP.

        Args:
            buffer: Raw archive bytes
            validate: Raise UnsafeEntryPath for unsafe names. When False,
                      unsafe names are collected in self.unsafe_entries
                      and left out of the entry list.

        Raises:
            ArchiveCorrupt: Not a ZIP, unreadable central directory,
                            encrypted entry, unsupported compression or
                            two entries with the same normalized path
            UnsafeEntryPath: validate is set and an entry path is unsafe
        """
        self.close()

        if not buffer:
            raise ArchiveCorrupt("Archive buffer is empty")

        try:
            archive = zipfile.ZipFile(io.BytesIO(buffer), 'r')
            infos = archive.infolist()
        except CORRUPT_ERRORS as e:
            raise ArchiveCorrupt(f"Unable to read ZIP central directory: {e}") from e

        try:
            entries = []
            lookup = {}
            unsafe = []
            for info in infos:
                if info.flag_bits & FLAG_ENCRYPTED:
                    raise ArchiveCorrupt(f"Encrypted entry not supported: {info.filename}")
                if info.compress_type not in SUPPORTED_METHODS:
                    raise ArchiveCorrupt(
                        f"Unsupported compression method {info.compress_type} "
                        f"for {info.filename}")

                try:
                    path = normalize_entry_path(info.filename)
                except UnsafeEntryPath:
                    if validate:
                        raise
                    unsafe.append(info.filename)
                    continue

                is_dir = path.endswith('/')
                path = path.rstrip('/')
                if path in lookup:
                    raise ArchiveCorrupt(
                        f"Duplicate entry {info.filename!r} (already have {lookup[path].filename!r})")
                entries.append(ArchiveEntry(
                    path=path,
                    size=info.file_size,
                    compressed_size=info.compress_size,
                    is_dir=is_dir,
                ))
                lookup[path] = info
        except Exception:
            archive.close()
            raise

        self._zip = archive
        self._file_list = entries
        self._infos = lookup
        self.unsafe_entries = unsafe
        self._is_open = True

    def close(self):
        if self._zip is not None:
            self._zip.close()
        self._zip = None
        self._infos = {}
        self._file_list = []
        self._is_open = False

    # ==========================================================================
    # DATA ACCESS
    # ==========================================================================

    def get_file_data(self, entry_path: str) -> Optional[bytes]:
        info = self._get_info(entry_path)
        if info is None:
            return None
        try:
            return self._zip.read(info)
        except CORRUPT_ERRORS as e:
            raise ArchiveCorrupt(f"Unable to decompress {entry_path}: {e}") from e

    def extract_file(self, entry_path: str, output_path: str):
        info = self._get_info(entry_path)
        if info is None:
            raise ArchiveCorrupt(f"Entry not found in archive: {entry_path}")

        try:
            with self._zip.open(info) as src, open(output_path, 'wb') as dst:
                shutil.copyfileobj(src, dst)
        except CORRUPT_ERRORS as e:
            raise ArchiveCorrupt(f"Unable to decompress {entry_path}: {e}") from e
        except OSError as e:
            raise ExtractionIOError(f"Failed to write {output_path}: {e}") from e

    def extract(self, buffer: bytes, destination_dir: str,
                progress_callback: Callable[[int, int, str], None] = None) -> int:
        """
        Open buffer, extract every entry into destination_dir and close.

        Args:
            buffer: Raw archive bytes
            destination_dir: Existing, writable directory
            progress_callback: Optional callback(current, total, entry_path)

        Returns:
            Number of entries extracted

        Raises:
            ArchiveCorrupt, UnsafeEntryPath, ExtractionIOError
        """
        self.open(buffer)
        try:
            count = self.extract_all(destination_dir, progress_callback)
        finally:
            self.close()

        print(f"[INFO] Extracted {count} entries to {destination_dir}")
        return count

    # ==========================================================================
    # HELPERS
    # ==========================================================================

    def _get_info(self, entry_path: str) -> Optional[zipfile.ZipInfo]:
        if not self._is_open:
            raise RuntimeError("Archive is not open")
        return self._infos.get(entry_path.replace('\\', '/').rstrip('/'))
