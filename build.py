# ==============================================================================
# FLAG VIEWER - BUILD SCRIPT
# ==============================================================================
# Builds the executable with the flag archive embedded in it.
#
# Usage:
#   python build.py                   # Build, bundle resources/flags.zip
#   python build.py --flags DIR       # Pack DIR into resources/flags.zip first
#   python build.py --onefile         # Build single exe
#   python build.py --append          # Also append the archive to the exe
#   python build.py --clean           # Clean build directories first
#
# Requirements:
#   pip install pyinstaller
#
# Output:
#   dist/FlagViewer/FlagViewer.exe  (directory mode)
#   dist/FlagViewer.exe             (onefile mode)
# ==============================================================================

import os
import sys
import shutil
import subprocess
import argparse


# ==============================================================================
# CONFIGURATION
# ==============================================================================

APP_NAME = "FlagViewer"
FLAGS_ARCHIVE = os.path.join("resources", "flags.zip")

# Directories to clean before build
CLEAN_DIRS = ['build', 'dist']


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================

def print_header(text: str):
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60 + "\n")


def print_success(text: str):
    print(f"[OK] {text}")


def print_error(text: str):
    print(f"[ERROR] {text}")


def print_info(text: str):
    print(f"[INFO] {text}")


def clean_build():
    """Remove build artifacts."""
    print_header("Cleaning Build Directories")

    for dir_name in CLEAN_DIRS:
        if os.path.exists(dir_name):
            print_info(f"Removing {dir_name}/")
            shutil.rmtree(dir_name, ignore_errors=True)

    print_success("Clean complete")


def check_dependencies():
    """Check if required tools are installed."""
    print_header("Checking Dependencies")

    try:
        import PyInstaller
        print_success(f"PyInstaller {PyInstaller.__version__} found")
    except ImportError:
        print_error("PyInstaller not found!")
        print_info("Install with: pip install pyinstaller")
        return False

    try:
        from PyQt6.QtCore import PYQT_VERSION_STR
        print_success(f"PyQt6 {PYQT_VERSION_STR} found")
    except ImportError:
        print_error("PyQt6 not found!")
        print_info("Install with: pip install PyQt6")
        return False

    return True


def pack_flags(source_dir: str) -> bool:
    """Pack a folder of images into the bundled flag archive."""
    print_header("Packing Flag Archive")
    from flagviewer.cli import main as cli_main
    return cli_main(['--no-color', 'pack', source_dir, FLAGS_ARCHIVE]) == 0


def run_pyinstaller(onefile: bool = False, noconsole: bool = True):
    """Run PyInstaller to create the executable."""
    print_header("Building Executable")

    cmd = [
        sys.executable, '-m', 'PyInstaller',
        '--name', APP_NAME,
        '--clean',
        '--noconfirm',
        '--onefile' if onefile else '--onedir',
        '--noconsole' if noconsole else '--console',
    ]

    # Embed the flag archive
    cmd.extend(['--add-data', f'{FLAGS_ARCHIVE}{os.pathsep}resources'])

    if os.path.exists('assets/icon.ico'):
        cmd.extend(['--icon', 'assets/icon.ico'])

    excludes = ['tkinter', 'matplotlib', 'numpy', 'pandas', 'scipy', 'IPython']
    for exc in excludes:
        cmd.extend(['--exclude-module', exc])

    cmd.append('main.py')

    print_info(f"Running: {' '.join(cmd[:10])}...")
    result = subprocess.run(cmd)

    if result.returncode != 0:
        print_error("PyInstaller failed!")
        return False

    print_success("Build complete!")
    return True


def get_exe_path(onefile: bool) -> str:
    exe_name = f'{APP_NAME}.exe' if sys.platform == 'win32' else APP_NAME
    if onefile:
        return os.path.join('dist', exe_name)
    return os.path.join('dist', APP_NAME, exe_name)


def append_archive(exe_path: str) -> bool:
    """
    Concatenate the flag archive onto the executable.

    ResourceLocator finds it again from the ZIP end record, so the exe
    keeps working even if the bundled copy is removed.
    """
    print_header("Appending Flag Archive")

    if not os.path.exists(exe_path):
        print_error(f"Executable not found: {exe_path}")
        return False

    with open(FLAGS_ARCHIVE, 'rb') as src, open(exe_path, 'ab') as dst:
        shutil.copyfileobj(src, dst)

    size_mb = os.path.getsize(exe_path) / (1024 * 1024)
    print_success(f"Appended {FLAGS_ARCHIVE} to {exe_path} ({size_mb:.1f} MB)")
    return True


# ==============================================================================
# MAIN
# ==============================================================================

def main():
    """Main build function."""
    parser = argparse.ArgumentParser(description=f"Build {APP_NAME} executable")
    parser.add_argument('--flags', help='Folder of flag images to pack first')
    parser.add_argument('--onefile', action='store_true',
                        help='Create single executable (slower startup)')
    parser.add_argument('--console', action='store_true',
                        help='Keep the console window')
    parser.add_argument('--append', action='store_true',
                        help='Append the flag archive to the built executable')
    parser.add_argument('--clean', action='store_true',
                        help='Clean build directories first')

    args = parser.parse_args()

    print_header(f"Building {APP_NAME}")

    if args.clean:
        clean_build()

    if args.flags and not pack_flags(args.flags):
        return 1

    if not os.path.isfile(FLAGS_ARCHIVE):
        print_error(f"{FLAGS_ARCHIVE} not found. Use --flags DIR to create it.")
        return 1

    if not check_dependencies():
        return 1

    if not run_pyinstaller(args.onefile, not args.console):
        return 1

    exe_path = get_exe_path(args.onefile)
    if args.append and not append_archive(exe_path):
        return 1

    print_header("Build Complete!")
    print(f"Run: {exe_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
