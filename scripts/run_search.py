"""
CLI script to search a folder of PDF files for keywords.

Usage:
    python scripts/run_search.py ~/Documents "invoice, facture"
    python scripts/run_search.py ~/Documents invoice --mode text
    python scripts/run_search.py ~/Documents "alpha;beta" --workers 4 --quiet
    python scripts/run_search.py ~/Documents invoice --config path/to/config.json
"""

import argparse
import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdfsearch.core import get_config, ConfigurationError, QueryError
from pdfsearch.core.config_loader import reload_config
from pdfsearch.search import MatchMode, ProgressEvent, SearchEngine, SearchScheduler
from pdfsearch.utils import get_relative_path


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search PDF files in a folder for one or more keywords"
    )

    parser.add_argument(
        "folder",
        type=str,
        help="Folder to search recursively"
    )

    parser.add_argument(
        "keywords",
        type=str,
        help="Keywords separated by spaces, commas or semicolons"
    )

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in MatchMode],
        help="Match per page (default) or on the whole document text"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=0,
        help="Worker threads (default: one per CPU)"
    )

    parser.add_argument(
        "--no-size-order",
        action="store_true",
        help="Dispatch files by path instead of smallest first"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    return parser.parse_args()


def progress_callback(event: ProgressEvent) -> None:
    """Print progress to console."""
    bar_width = 30
    filled = int(bar_width * event.current / event.total) if event.total > 0 else 0
    bar = "=" * filled + "-" * (bar_width - filled)
    filename = Path(event.current_file).name

    print(
        f"\r[{bar}] {event.percent:5.1f}% ({event.current}/{event.total}) {filename[:40]:<40}",
        end="",
        flush=True
    )


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)

    try:
        config = reload_config(Path(args.config)) if args.config else get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    scheduler = SearchScheduler(
        max_workers=args.workers or None,
        order_by_size=False if args.no_size_order else None
    )
    engine = SearchEngine(scheduler=scheduler, match_mode=args.mode)

    print("=" * 60)
    print("PDF Keyword Search")
    print("=" * 60)
    print(f"Folder:       {args.folder}")
    print(f"Keywords:     {args.keywords}")
    print(f"Match mode:   {engine.match_mode.value}")
    print(f"Workers:      {scheduler.max_workers}")
    print(f"Cache:        {config.cache.capacity} entries ({config.cache.eviction_policy})")
    print("=" * 60)

    callback = None if args.quiet else progress_callback
    cancel_event = threading.Event()

    try:
        report = engine.run(args.keywords, root=args.folder, progress_callback=callback, cancel_event=cancel_event)
    except QueryError as e:
        print(f"Query error: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        cancel_event.set()
        print("\nCancelled.")
        sys.exit(130)

    if not args.quiet:
        print("\n")

    for result in report.results:
        print(f"{get_relative_path(result.file_path, args.folder)}  ({result.file_size:,} bytes)  [{', '.join(result.keywords)}]")
        for info in result.page_info:
            page = info.page_number if info.page_number is not None else "?"
            snippet = " ".join(info.matched_text.split())
            print(f"    p.{page}: {snippet}")

    print("=" * 60)
    print("Search Complete")
    print("=" * 60)
    print(f"Files found:       {report.files_total:,}")
    print(f"Files matched:     {report.files_matched:,}")
    print(f"Without match:     {report.files_without_match:,}")
    print(f"Files skipped:     {report.files_skipped:,}")
    print(f"Time:              {report.execution_time_ms / 1000:.2f}s")
    print("=" * 60)

    if report.skipped:
        print(f"\nSkipped ({len(report.skipped)}):")
        for filepath, reason in report.skipped[:20]:
            print(f"  - {Path(filepath).name}: {reason}")
        if len(report.skipped) > 20:
            print(f"  ... and {len(report.skipped) - 20} more")

    sys.exit(0)


if __name__ == "__main__":
    main()
