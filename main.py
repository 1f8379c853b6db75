# ==============================================================================
# FLAG VIEWER - MAIN ENTRY POINT
# ==============================================================================
# This is the main entry point for the Flag Viewer application.
# It can be run in either GUI mode (default) or CLI mode.
#
# Usage:
#   python main.py              # Launch GUI
#   python main.py --cli pick   # Launch CLI
#   python main.py --help       # Show help
#
# When built as exe:
#   FlagViewer.exe              # Launch GUI
#   FlagViewer.exe --cli list   # Launch CLI
# ==============================================================================

import sys
import traceback

from flagviewer import __version__, __description__
from flagviewer.core.paths import Paths
from flagviewer.core.resources import FLAGS_RESOURCE_ID, RESOURCE_TABLE


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

def check_dependencies():
    """
    Check if required dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    for module, package in (('PyQt6', 'PyQt6'), ('PIL', 'Pillow')):
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    return (len(missing) == 0, missing)


# ==============================================================================
# MODE LAUNCHERS
# ==============================================================================

def run_gui():
    """
    Launch the graphical user interface.

    Returns:
        Exit code (0 for success)
    """
    try:
        from PyQt6.QtWidgets import QApplication
        from flagviewer.gui.main_window import MainWindow
    except ImportError as e:
        print(f"\n[ERROR] Import failed: {e}")
        print("PyQt6 is required for GUI mode. Install with: pip install PyQt6")
        print("Or use CLI mode: python main.py --cli pick")
        return 1

    app = QApplication(sys.argv)
    app.setApplicationName("Flag Viewer")
    app.setApplicationVersion(__version__)
    app.setOrganizationName(Paths.APP_NAME)

    window = MainWindow()
    window.show()
    return app.exec()


def run_cli(argv):
    """
    Launch the command-line interface.

    Returns:
        Exit code (0 for success)
    """
    from flagviewer.cli import main as cli_main
    return cli_main(argv)


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main(argv=None):
    """
    Main entry point for Flag Viewer.

    Parses command-line arguments and launches either GUI or CLI mode.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if '--cli' in argv:
        argv.remove('--cli')
        return run_cli(argv)

    if '--version' in argv or '-v' in argv:
        print(f"Flag Viewer v{__version__}")
        print(__description__)
        return 0

    if '--paths' in argv:
        print("Flag Viewer Paths:")
        print(f"  Frozen:         {Paths.is_frozen()}")
        print(f"  App Path:       {Paths.get_app_dir()}")
        print(f"  Bundle Path:    {Paths.get_bundle_dir()}")
        print(f"  Flag Archive:   {Paths.get_resource_path(RESOURCE_TABLE[FLAGS_RESOURCE_ID])}")
        print(f"  Host Exe:       {Paths.get_host_executable() or '-'}")
        print(f"  Config:         {Paths.get_config_path()}")
        return 0

    if '--check' in argv:
        print("Checking dependencies...")
        print(f"  Frozen: {Paths.is_frozen()}")
        print(f"  Python: {sys.version}")
        all_ok, missing = check_dependencies()
        if all_ok:
            print("[OK] All dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")
        return 0 if all_ok else 1

    if '--help' in argv or '-h' in argv:
        print("\nUsage: FlagViewer [options]")
        print("\nOptions:")
        print("  --cli        Run in command-line mode instead of GUI")
        print("  --help, -h   Show this help message")
        print("  --version    Show version information")
        print("  --check      Check dependencies and exit")
        print("  --paths      Show data paths and exit")
        print("\nCLI Commands (use with --cli):")
        print("  pick         Show random flags")
        print("  list         List the flag catalog")
        print("  pack         Build the flag archive from a folder")
        print("  inspect      List archive entries without extracting")
        return 0

    try:
        return run_gui()
    except Exception as e:
        print(f"\n[FATAL ERROR] {e}")
        traceback.print_exc()
        return 1


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    sys.exit(main())
