# ==============================================================================
# EXTRACTORS MODULE INIT
# ==============================================================================
# Archive extractors for Flag Viewer.
#
#   - BaseExtractor: Abstract base class defining the interface
#   - ZipExtractor: ZIP archives held in memory
#
# Usage:
#   from flagviewer.extractors import ZipExtractor
#   count = ZipExtractor().extract(data, "output/")
# ==============================================================================

from .base_extractor import BaseExtractor, ArchiveEntry, normalize_entry_path, safe_join
from .zip_extractor import ZipExtractor

__all__ = [
    'BaseExtractor',
    'ArchiveEntry',
    'normalize_entry_path',
    'safe_join',
    'ZipExtractor',
]
