"""Command line interface for bleedfix."""
import argparse
import logging
import sys
from pathlib import Path

from bleedfix.types import FixConfig, FillStrategyKind, FileResult
from bleedfix.discovery import resolve_files
from bleedfix.batch import run_batch

BANNER = r"""   ___  __    ____  ____  ____  ____  _  _
  (  ,)(  )  ( ___)( ___)(  _ \( ___)( \/ )
   ) ,\ )(__  )__)  )__)  )(_) ))__)  )  (
  (___/(____)(____)(____)(____/(__)  (_/\_)
"""


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='bleedfix',
        description='Fix color bleed in transparent pixels of RGBA images'
    )

    parser.add_argument(
        'paths',
        nargs='*',
        help='PNG files or directories of PNG files (fixed in place)'
    )

    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        help='Make filled pixels opaque to visualize the fill (nearest strategy)'
    )

    parser.add_argument(
        '--strategy',
        type=str,
        choices=[kind.value for kind in FillStrategyKind],
        default=FillStrategyKind.NEAREST.value,
        help='Fill strategy: nearest (copy nearest edge color) or flood (ring averaging, solidifies alpha)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=-1,
        help='Number of worker threads (default: one per CPU)'
    )

    parser.add_argument(
        '--convert',
        action='store_true',
        help='Convert non-RGBA images to RGBA instead of skipping them'
    )

    parser.add_argument(
        '--wait',
        action='store_true',
        help='Wait for Enter before exiting'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (-v info, -vv debug)'
    )

    return parser


def _print_progress(index: int, total: int, result: FileResult) -> None:
    name = Path(result.path).name
    if result.success:
        print(f"[{index}/{total}] [OK] {name}")
    else:
        print(f"[{index}/{total}] [FAIL] {name}: {result.message}")


def main(args=None):
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    level = logging.WARNING
    if parsed_args.verbose == 1:
        level = logging.INFO
    elif parsed_args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    config = FixConfig(
        strategy=FillStrategyKind(parsed_args.strategy),
        debug=parsed_args.debug,
        parallel_workers=parsed_args.workers,
        convert_to_rgba=parsed_args.convert,
    )

    print(BANNER)

    fixed = 0
    failed = 0
    elapsed = 0.0

    if not parsed_args.paths:
        print("Drop png files on the exe to fix them!")
    else:
        print("Processing your files, please wait!")

        files, ignored = resolve_files(parsed_args.paths, config.extensions)
        results = run_batch(files, config, progress=_print_progress)

        fixed = results.fixed
        failed = results.failed + ignored
        elapsed = results.elapsed

    print()

    if fixed > 0:
        print(f"Successfully fixed {fixed} images in {elapsed:.4f} seconds!")
    else:
        print("No files were able to be fixed!")

    if failed > 0:
        print(f"Skipped {failed} files that couldn't be fixed!")

    if parsed_args.wait:
        print("\nPress enter to exit")
        try:
            input()
        except EOFError:
            pass

    return 0 if failed == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
