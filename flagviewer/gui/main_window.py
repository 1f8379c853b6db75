# ==============================================================================
# MAIN WINDOW MODULE
# ==============================================================================
# The viewer window: one image, the flag's name, a status line and a
# "Random Flag" button.
#
# Extraction runs on a worker thread so the window paints immediately;
# the controller's workspace is removed when the window closes.
# ==============================================================================

import traceback
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QSizePolicy,
)
from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtGui import QPixmap

from ..core.config import Config, get_config
from ..core.controller import CoreController
from ..core.errors import CoreError


# ==============================================================================
# WORKER THREAD FOR INITIALIZATION
# ==============================================================================
class InitWorker(QThread):
    """
    Runs CoreController.initialize() off the GUI thread.

    Signals:
        done(bool): True if the controller is ready
    """
    done = pyqtSignal(bool)

    def __init__(self, controller: CoreController):
        super().__init__()
        self.controller = controller

    def run(self):
        try:
            ok = self.controller.initialize()
        except Exception as e:
            print(f"[ERROR] Initialization crashed: {e}")
            traceback.print_exc()
            ok = False
        self.done.emit(ok)


# ==============================================================================
# MAIN WINDOW
# ==============================================================================
class MainWindow(QMainWindow):
    """
    Flag viewer main window.

    Attributes:
        controller (CoreController): Owns the extracted flags
    """

    def __init__(self, controller: Optional[CoreController] = None,
                 config: Optional[Config] = None):
        super().__init__()
        self.config = config or get_config()
        self.controller = controller or CoreController(config=self.config)
        self._worker: Optional[InitWorker] = None

        self.setWindowTitle("Flag Viewer")
        self.resize(self.config.window_width, self.config.window_height)
        self._build_ui()

        self.start_loading()

    # -------------------------------------------------------------------------
    # UI
    # -------------------------------------------------------------------------

    def _build_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumSize(200, 150)
        self.image_label.setSizePolicy(QSizePolicy.Policy.Expanding,
                                       QSizePolicy.Policy.Expanding)
        layout.addWidget(self.image_label, stretch=1)

        self.name_label = QLabel("Loading...")
        self.name_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.name_label.font()
        font.setPointSize(font.pointSize() + 4)
        font.setBold(True)
        self.name_label.setFont(font)
        layout.addWidget(self.name_label)

        self.random_button = QPushButton("Random Flag")
        self.random_button.setEnabled(False)
        self.random_button.clicked.connect(self.on_random_clicked)
        layout.addWidget(self.random_button)

        self.status_label = QLabel(self.controller.status_message)
        layout.addWidget(self.status_label)

        self.setCentralWidget(central)

    def set_status(self, text: str, error: bool = False):
        self.status_label.setText(text)
        self.status_label.setStyleSheet("color: red;" if error else "")

    # -------------------------------------------------------------------------
    # LOADING
    # -------------------------------------------------------------------------

    def start_loading(self):
        self.set_status("Status: Extracting resource...")
        self._worker = InitWorker(self.controller)
        self._worker.done.connect(self.on_loaded)
        self._worker.start()

    def on_loaded(self, ok: bool):
        if not ok:
            self.name_label.setText("")
            self.set_status(self.controller.status_message, error=True)
            return

        if self.controller.is_empty:
            self.name_label.setText("No flag images available")
            self.set_status(self.controller.status_message, error=True)
            return

        self.set_status(self.controller.status_message)
        self.random_button.setEnabled(True)
        if self.config.show_on_start:
            self.show_random_flag()
        else:
            self.name_label.setText("")

    # -------------------------------------------------------------------------
    # DISPLAY
    # -------------------------------------------------------------------------

    def on_random_clicked(self):
        self.image_label.clear()
        self.name_label.setText("Loading...")
        self.show_random_flag()

    def show_random_flag(self):
        try:
            result = self.controller.pick_random()
        except CoreError as e:
            self.name_label.setText("No flag images available")
            self.set_status(f"Status: {e.message}", error=True)
            return

        pixmap = QPixmap(result.path)
        if pixmap.isNull():
            self.name_label.setText("Image loading failed")
            self.set_status(f"Status: Unable to load {result.path}", error=True)
            return

        self.image_label.setPixmap(pixmap.scaled(
            self.image_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        ))
        self.name_label.setText(f"Flag: {result.display_name}")
        self.set_status(f"Status: Displaying {result.position}/{result.total} flag")

    # -------------------------------------------------------------------------
    # SHUTDOWN
    # -------------------------------------------------------------------------

    def closeEvent(self, event):
        if self._worker is not None:
            # No mid-extraction cancel; let the worker finish first
            self._worker.wait()
        self.controller.shutdown()
        super().closeEvent(event)
