# ==============================================================================
# FLAG VIEWER - SOURCE PACKAGE
# ==============================================================================
# Main package for Flag Viewer.
#
# Subpackages:
#   - core: Resource loading, workspace, catalog, selection, controller
#   - extractors: In-memory archive extractors
#   - gui: PyQt6 viewer window
#
# Entry points:
#   - main.py: GUI/CLI launcher
#   - flagviewer/cli.py: Command-line interface
#   - flagviewer/gui/main_window.py: GUI application
# ==============================================================================

__version__ = "1.0.0"
__description__ = "Random flag viewer backed by an embedded image archive"

# Convenience imports
from .core import CoreController, SelectionResult, ControllerState
from .extractors import ZipExtractor

__all__ = [
    '__version__',
    '__description__',

    # Core
    'CoreController',
    'SelectionResult',
    'ControllerState',

    # Extractors
    'ZipExtractor',
]
