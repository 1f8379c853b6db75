# ==============================================================================
# FLAG VIEWER - COMMAND LINE INTERFACE
# ==============================================================================
# Console front end for the flag archive.
#
# Commands:
#   - pick: Extract the embedded archive and show random flags
#   - list: Extract the embedded archive and list the catalog
#   - pack: Build the flag archive from a folder of images
#   - inspect: List archive entries without extracting, flag unsafe paths
#
# Usage:
#   python main.py --cli pick --count 3
#   python main.py --cli list
#   python main.py --cli pack flags/ resources/flags.zip
#   python main.py --cli inspect --archive resources/flags.zip
# ==============================================================================

import os
import sys
import zipfile
import argparse
from typing import List, Optional

from PIL import Image

from .core.catalog import AssetCatalog
from .core.config import get_config
from .core.controller import CoreController
from .core.errors import CoreError
from .core.paths import Paths
from .core.resources import FLAGS_RESOURCE_ID, RESOURCE_TABLE, ResourceLocator
from .core.selector import Selector
from .extractors.zip_extractor import ZipExtractor


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    CYAN = '\033[96m'
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-supporting terminals)."""
        cls.CYAN = ''
        cls.BLUE = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}\n")


def print_success(text: str):
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}✗ {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_warning(text: str):
    print(f"{Colors.YELLOW}⚠ {text}{Colors.END}")


# ==============================================================================
# HELPERS
# ==============================================================================

def describe_image(path: str) -> str:
    """Short "PNG 64x48" description of an image file, via Pillow."""
    try:
        with Image.open(path) as img:
            return f"{img.format} {img.width}x{img.height}"
    except OSError:
        return "unreadable image"


def default_archive_path() -> str:
    return Paths.get_resource_path(RESOURCE_TABLE[FLAGS_RESOURCE_ID])


def build_controller(args) -> CoreController:
    """Create a controller honouring --resource-dir and --seed."""
    locator = ResourceLocator(base_dir=args.resource_dir) if args.resource_dir else None

    selector = None
    if getattr(args, 'seed', None) is not None:
        selector = Selector()
        selector.seed(args.seed)

    return CoreController(config=get_config(), locator=locator, selector=selector)


# ==============================================================================
# PICK / LIST COMMANDS
# ==============================================================================

def cmd_pick(args) -> int:
    """Show random flags from the embedded archive."""
    print_header("Random Flags")

    with build_controller(args) as controller:
        if not controller.initialize():
            print_error(controller.status_message)
            return 1

        if controller.is_empty:
            print_warning(controller.status_message)
            return 0

        print_info(controller.status_message)
        for _ in range(max(1, args.count)):
            result = controller.pick_random()
            print(f"  Flag: {result.display_name:<30} "
                  f"{result.position:>4}/{result.total:<4} "
                  f"{describe_image(result.path)}")

    return 0


def cmd_list(args) -> int:
    """List every image in the embedded archive."""
    print_header("Flag Catalog")

    with build_controller(args) as controller:
        if not controller.initialize():
            print_error(controller.status_message)
            return 1

        catalog = controller.catalog
        if catalog.is_empty:
            print_warning(controller.status_message)
            return 0

        for index, path in enumerate(catalog):
            relative = os.path.relpath(path, catalog.root).replace(os.sep, '/')
            print(f"{index + 1:>4}  {relative}")

        print(f"\nTotal: {len(catalog)} images")

    return 0


# ==============================================================================
# PACK / INSPECT COMMANDS
# ==============================================================================

def cmd_pack(args) -> int:
    """Build the flag archive from a folder of images."""
    print_header("Pack Flag Archive")

    source = os.path.abspath(args.source)
    output = os.path.abspath(args.output or default_archive_path())

    try:
        catalog = AssetCatalog().scan(source)
    except CoreError as e:
        print_error(e.message)
        return 1

    if catalog.is_empty:
        print_warning(f"No image files found in {source}")
        return 1

    os.makedirs(os.path.dirname(output), exist_ok=True)

    packed = 0
    with zipfile.ZipFile(output, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for path in catalog:
            try:
                with Image.open(path) as img:
                    img.verify()
            except (OSError, SyntaxError) as e:
                print_warning(f"Skipping unreadable image {path}: {e}")
                continue

            arcname = os.path.relpath(path, source).replace(os.sep, '/')
            zf.write(path, arcname)
            packed += 1

    print_success(f"Packed {packed} images into {output}")
    return 0 if packed else 1


def cmd_inspect(args) -> int:
    """List archive entries without extracting anything."""
    print_header("Inspect Flag Archive")

    try:
        if args.archive:
            with open(args.archive, 'rb') as f:
                data = f.read()
            source = args.archive
        else:
            locator = ResourceLocator(base_dir=args.resource_dir) if args.resource_dir else ResourceLocator()
            resource = locator.load(FLAGS_RESOURCE_ID)
            data, source = resource.data, resource.source
    except OSError as e:
        print_error(f"Unable to read {args.archive}: {e}")
        return 1
    except CoreError as e:
        print_error(f"{e.kind}: {e.message}")
        return 1

    extractor = ZipExtractor()
    try:
        extractor.open(data, validate=False)
    except CoreError as e:
        print_error(f"{e.kind}: {e.message}")
        return 1

    with extractor:
        print_info(f"Archive: {source} ({extractor.format_name}, {len(data)} bytes)")
        print(f"\n{'Size':>10} {'Packed':>10}  Path")
        print("-" * 60)
        for entry in extractor.list_files():
            name = entry.path + ('/' if entry.is_dir else '')
            print(f"{entry.size:>10} {entry.compressed_size:>10}  {name}")

        print(f"\nTotal: {extractor.get_file_count()} entries, "
              f"{extractor.get_total_size()} bytes uncompressed")

        if extractor.unsafe_entries:
            for name in extractor.unsafe_entries:
                print_error(f"Unsafe entry path: {name}")
            return 1

    print_success("All entry paths are safe")
    return 0


# ==============================================================================
# MAIN
# ==============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run a command. Returns the exit code."""
    parser = argparse.ArgumentParser(
        prog="flagviewer",
        description="Flag Viewer - random flags from an embedded image archive",
    )
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    subparsers = parser.add_subparsers(dest='command')

    # -------------------------------------------------------------------------
    # PICK
    # -------------------------------------------------------------------------
    pick_parser = subparsers.add_parser('pick', help='Show random flags')
    pick_parser.add_argument('--count', '-n', type=int, default=1, help='Number of picks')
    pick_parser.add_argument('--seed', type=int, help='Fixed random seed')
    pick_parser.add_argument('--resource-dir', help='Directory holding resources/flags.zip')
    pick_parser.set_defaults(func=cmd_pick)

    # -------------------------------------------------------------------------
    # LIST
    # -------------------------------------------------------------------------
    list_parser = subparsers.add_parser('list', help='List the flag catalog')
    list_parser.add_argument('--resource-dir', help='Directory holding resources/flags.zip')
    list_parser.set_defaults(func=cmd_list)

    # -------------------------------------------------------------------------
    # PACK
    # -------------------------------------------------------------------------
    pack_parser = subparsers.add_parser('pack', help='Build the flag archive')
    pack_parser.add_argument('source', help='Folder of flag images')
    pack_parser.add_argument('output', nargs='?', help='Archive to write (default: bundled resource)')
    pack_parser.set_defaults(func=cmd_pack)

    # -------------------------------------------------------------------------
    # INSPECT
    # -------------------------------------------------------------------------
    inspect_parser = subparsers.add_parser('inspect', help='List archive entries')
    inspect_parser.add_argument('--archive', help='Archive file (default: embedded resource)')
    inspect_parser.add_argument('--resource-dir', help='Directory holding resources/flags.zip')
    inspect_parser.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
