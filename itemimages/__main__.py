"""
Main entry point for running the package as a module.

Usage:
    python -m itemimages ingest photo.jpg -d data/images
    python -m itemimages delete --id <uuid> -d data/images
    python -m itemimages size data/images
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
