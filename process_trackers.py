"""CLI shim -- delegates to tracker_pipeline.cli.main().

Usage:
    python process_trackers.py --source_dir_path ./trackers --output_dir_path ./out
"""

import sys

from tracker_pipeline.cli import main

if __name__ == "__main__":
    sys.exit(main())
