"""
Command Line Interface for image versioning.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .exceptions import FilesystemError
from .image_config import ImageConfig
from .image_version_set import format_bytes
from .ingest_progress import IngestProgress
from .local_store import LocalStore
from .versioner import ImageVersioner


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    logging.getLogger('PIL').setLevel(logging.WARNING)
    
    return logging.getLogger('itemimages')


def get_image_config(args: argparse.Namespace) -> ImageConfig:
    """Get image configuration from environment and CLI overrides."""
    config = ImageConfig.from_env()
    
    overrides = {}
    if getattr(args, 'display_width', None) is not None:
        overrides['display_max_width'] = args.display_width
    if getattr(args, 'thumb_width', None) is not None:
        overrides['thumbnail_max_width'] = args.thumb_width
    if getattr(args, 'display_quality', None) is not None:
        overrides['display_quality'] = args.display_quality
    if getattr(args, 'thumb_quality', None) is not None:
        overrides['thumbnail_quality'] = args.thumb_quality
    
    return config.replace(**overrides) if overrides else config


def cmd_ingest(args: argparse.Namespace) -> int:
    """Execute ingest command."""
    logger = setup_logging(args.verbose)
    
    try:
        config = get_image_config(args)
    except ValueError as e:
        logger.error(f"Invalid ITEMIMAGES_* environment value: {e}")
        return 1
    
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1
    
    logger.info(f"Destination: {args.dest}")
    logger.info(
        f"Display: {config.display_max_width}px q{config.display_quality}, "
        f"thumbnail: {config.thumbnail_max_width}px q{config.thumbnail_quality}"
    )
    
    versioner = ImageVersioner(parallel_encode=args.parallel, logger=logger)
    
    progress = None
    if not args.quiet:
        progress = IngestProgress(show_files=args.show_files, logger=logger)
    
    try:
        stats = versioner.ingest_many(args.files, args.dest, config, progress=progress)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    
    if args.json:
        print(json.dumps([r.to_dict() for r in stats.results], indent=2))
    elif not args.quiet:
        print()
        print(f"Ingested: {stats.processed}")
        print(f"Errors: {stats.errors}")
        print(f"Written: {format_bytes(stats.bytes_written)}")
        print(f"Time: {stats.elapsed_seconds:.1f}s")
    
    return 0 if stats.errors == 0 else 1


def cmd_delete(args: argparse.Namespace) -> int:
    """Execute delete command. Always succeeds; problems are reported."""
    logger = setup_logging(args.verbose)
    store = LocalStore(logger)
    
    if args.id:
        if not args.dest:
            logger.error("--id requires --dest")
            return 1
        try:
            paths = store.find_triplet(args.dest, args.id)
        except FilesystemError as e:
            logger.error(str(e))
            return 1
        if paths is None:
            logger.info(f"No files found for {args.id} in {args.dest}")
            return 0
    elif len(args.paths) == 3:
        paths = tuple(args.paths)
    else:
        logger.error("delete needs ORIGINAL DISPLAY THUMBNAIL paths or --id with --dest")
        return 1
    
    problems = store.delete_triplet(*paths)
    for problem in problems:
        print(f"  [WARN] {problem}")
    
    logger.info(f"Deleted image versions ({len(problems)} problems)")
    return 0


def cmd_size(args: argparse.Namespace) -> int:
    """Execute size command."""
    logger = setup_logging(args.verbose)
    
    try:
        total = LocalStore(logger).directory_size(args.directory)
    except FilesystemError as e:
        logger.error(f"Size calculation failed: {e}")
        return 1
    
    if args.bytes:
        print(total)
    else:
        print(f"{args.directory}: {format_bytes(total)}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='itemimages',
        description='Original/display/thumbnail image versions for inventory items',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m itemimages ingest photo.jpg -d data/images
  python -m itemimages delete --id <uuid> -d data/images
  python -m itemimages size data/images

Configuration:
  ITEMIMAGES_DISPLAY_MAX_WIDTH, ITEMIMAGES_THUMBNAIL_MAX_WIDTH,
  ITEMIMAGES_DISPLAY_QUALITY, ITEMIMAGES_THUMBNAIL_QUALITY,
  ITEMIMAGES_ORIGINAL_QUALITY, ITEMIMAGES_REENCODE_THRESHOLD_BYTES
  CLI flags override environment values.
"""
    )
    
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    
    # Ingest command
    ingest_parser = subparsers.add_parser('ingest', help='Create image versions from source files')
    ingest_parser.add_argument('files', nargs='+', metavar='FILE', help='Source image(s)')
    ingest_parser.add_argument('-d', '--dest', required=True, help='Destination directory')
    ingest_parser.add_argument('--display-width', type=int, metavar='N',
                               help='Display max width (default: 1200)')
    ingest_parser.add_argument('--thumb-width', type=int, metavar='N',
                               help='Thumbnail max width (default: 300)')
    ingest_parser.add_argument('--display-quality', type=int, metavar='Q',
                               help='Display JPEG quality (default: 85)')
    ingest_parser.add_argument('--thumb-quality', type=int, metavar='Q',
                               help='Thumbnail JPEG quality (default: 75)')
    ingest_parser.add_argument('--parallel', action='store_true',
                               help='Encode display and thumbnail concurrently')
    ingest_parser.add_argument('--show-files', action='store_true',
                               help='Print each file as processed with result')
    ingest_parser.add_argument('--json', action='store_true',
                               help='Print the stored version sets as JSON')
    ingest_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    ingest_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    # Delete command
    delete_parser = subparsers.add_parser('delete', help='Delete the three versions of an image')
    delete_parser.add_argument('paths', nargs='*', metavar='PATH',
                               help='ORIGINAL DISPLAY THUMBNAIL paths')
    delete_parser.add_argument('--id', help='Image identifier to delete (with --dest)')
    delete_parser.add_argument('-d', '--dest', help='Directory holding the image versions')
    delete_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    # Size command
    size_parser = subparsers.add_parser('size', help='Total size of an images directory')
    size_parser.add_argument('directory', help='Directory to measure')
    size_parser.add_argument('--bytes', action='store_true', help='Print the raw byte count')
    size_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    
    if not parsed_args.command:
        parser.print_help()
        return 1
    
    if parsed_args.command == 'ingest':
        return cmd_ingest(parsed_args)
    elif parsed_args.command == 'delete':
        return cmd_delete(parsed_args)
    elif parsed_args.command == 'size':
        return cmd_size(parsed_args)
    
    return 1
