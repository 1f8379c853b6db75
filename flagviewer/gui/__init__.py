# ==============================================================================
# GUI MODULE INIT
# ==============================================================================
# PyQt6 viewer window for Flag Viewer.
#
# Usage:
#   from flagviewer.gui import MainWindow
# ==============================================================================

from .main_window import MainWindow, InitWorker

__all__ = ['MainWindow', 'InitWorker']
