"""Input file discovery."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from bleedfix.types import FixConfig

logger = logging.getLogger(__name__)


def has_extension(path: Path, extensions: Set[str]) -> bool:
    """Case-insensitive extension check."""
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def resolve_files(
    args: Iterable[str],
    extensions: Optional[Set[str]] = None
) -> Tuple[List[Path], int]:
    """
    Resolve command line arguments into image files.

    Each argument may be a file or a directory; directories are listed one
    level deep. Missing paths are skipped. Existing files with the wrong
    extension are skipped and counted.

    Args:
        args: File or directory paths
        extensions: Accepted extensions (default: FixConfig.extensions)

    Returns:
        Tuple of (accepted files, number of ignored files)
    """
    if extensions is None:
        extensions = FixConfig().extensions

    files = []
    ignored = 0

    for arg in args:
        path = Path(arg)

        if not path.exists():
            logger.warning(f"Ignoring \"{arg}\" - It does not exist!")
            continue

        if path.is_file():
            if has_extension(path, extensions):
                files.append(path)
            else:
                logger.warning(f"Ignoring \"{arg}\" - Only {_describe(extensions)} files are accepted!")
                ignored += 1
            continue

        if not path.is_dir():
            continue

        try:
            entries = sorted(path.iterdir())
        except OSError as e:
            logger.warning(f"Ignoring \"{arg}\" - An error occurred reading directory: {e}")
            ignored += 1
            continue

        for entry in entries:
            if not entry.is_file():
                continue
            if has_extension(entry, extensions):
                files.append(entry)
            else:
                logger.warning(f"Ignoring \"{entry}\" - Only {_describe(extensions)} files are accepted!")
                ignored += 1

    return files, ignored


def _describe(extensions: Set[str]) -> str:
    return "/".join(sorted(ext.lstrip('.').upper() for ext in extensions))
