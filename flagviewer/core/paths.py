# ==============================================================================
# FLAG VIEWER - PATH UTILITIES
# ==============================================================================
# Centralized path handling that works for both development and frozen exe.
#
# When running as a script:
#   - Bundled resources are resolved relative to the project directory
#
# When running as frozen exe (PyInstaller):
#   - Bundled resources live in sys._MEIPASS
#   - The host executable (sys.executable) may carry an appended payload
#   - User data (config) goes in AppData
#
# Usage:
#   from flagviewer.core.paths import Paths
#   archive = Paths.get_resource_path("resources/flags.zip")
#   config_path = Paths.get_config_path()
# ==============================================================================

import os
import sys
from typing import Optional


class Paths:
    """
    Centralized path management for Flag Viewer.

    Handles the difference between running as a Python script
    and running as a frozen PyInstaller executable.

    User data (config) is stored in:
    - Windows: %APPDATA%/FlagViewer/
    - Linux: ~/.config/FlagViewer/
    - macOS: ~/Library/Application Support/FlagViewer/
    """

    # Application name for folder creation
    APP_NAME = "FlagViewer"

    # Cache for computed paths
    _app_dir: Optional[str] = None
    _user_data_dir: Optional[str] = None

    @classmethod
    def is_frozen(cls) -> bool:
        """
        Check if running as a frozen executable.

        Returns:
            True if running as PyInstaller exe, False if running as script
        """
        return bool(getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'))

    @classmethod
    def get_app_dir(cls) -> str:
        """
        Get the application directory.

        For script: The project root directory
        For exe: The directory containing the executable

        Returns:
            Absolute path to application directory
        """
        if cls._app_dir is None:
            if cls.is_frozen():
                cls._app_dir = os.path.dirname(sys.executable)
            else:
                # This file is in flagviewer/core/, so go up 3 levels
                cls._app_dir = os.path.dirname(
                    os.path.dirname(
                        os.path.dirname(os.path.abspath(__file__))
                    )
                )
        return cls._app_dir

    @classmethod
    def get_bundle_dir(cls) -> str:
        """
        Get the directory holding bundled data files.

        PyInstaller unpacks --add-data files into _MEIPASS; in script
        mode they sit in the project root.
        """
        if cls.is_frozen():
            return sys._MEIPASS
        return cls.get_app_dir()

    @classmethod
    def get_host_executable(cls) -> Optional[str]:
        """
        Get the path of the running host executable.

        Only meaningful when frozen; a script run is hosted by the
        Python interpreter, which never carries our payload.

        Returns:
            Absolute path to the exe, or None when running as a script
        """
        if cls.is_frozen():
            return os.path.abspath(sys.executable)
        return None

    @classmethod
    def get_user_data_dir(cls) -> str:
        """
        Get the user data directory.

        Returns:
            Absolute path to user data directory
        """
        if cls._user_data_dir is None:
            if sys.platform == 'win32':
                base = os.environ.get('APPDATA', os.path.expanduser('~'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)
            elif sys.platform == 'darwin':
                cls._user_data_dir = os.path.join(
                    os.path.expanduser('~'),
                    'Library', 'Application Support', cls.APP_NAME
                )
            else:
                base = os.environ.get('XDG_CONFIG_HOME',
                                      os.path.join(os.path.expanduser('~'), '.config'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)

        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> str:
        """
        Get the path to the configuration file.

        Returns:
            Absolute path to config.json
        """
        return os.path.join(cls.get_user_data_dir(), 'config.json')

    @classmethod
    def get_resource_path(cls, relative_path: str) -> str:
        """
        Get absolute path to a bundled resource file.

        Works for both development and frozen exe.

        Args:
            relative_path: Path relative to the bundle directory

        Returns:
            The absolute path (the file may not exist)
        """
        return os.path.join(cls.get_bundle_dir(), relative_path)

    @classmethod
    def reset(cls):
        """Forget cached paths (used after sys.frozen / env changes)."""
        cls._app_dir = None
        cls._user_data_dir = None
