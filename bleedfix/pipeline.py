"""Per-file alpha-bleed correction pipeline."""
import logging
import time
from pathlib import Path
from typing import Optional, Union

from bleedfix.types import Raster, FixConfig, FileResult, BleedFixError
from bleedfix.raster_io import load_raster, save_raster
from bleedfix.border import classify_border_pixels
from bleedfix.strategies.router import get_strategy_for_kind

logger = logging.getLogger(__name__)


def fix_raster(raster: Raster, config: Optional[FixConfig] = None) -> int:
    """
    Classify a raster and fill its transparent pixels in place.

    The raster is only written once the fill has fully succeeded.

    Args:
        raster: Raster to fix
        config: Configuration (uses defaults if None)

    Returns:
        Number of transparent pixels filled

    Raises:
        NoBorderPixelsError: If there is nothing to fix
        IndexConstructionError: If the nearest strategy cannot index the border
    """
    config = config or FixConfig()

    border = classify_border_pixels(raster)
    fill = get_strategy_for_kind(config.strategy)
    filled = fill(raster, border, config.debug)

    raster.pixels[...] = filled
    return border.transparent_count


def process_file(path: Union[str, Path], config: Optional[FixConfig] = None) -> FileResult:
    """
    Decode, fix and write back one image file.

    Never raises; every failure becomes an unsuccessful FileResult and the
    file on disk is left as it was.
    """
    config = config or FixConfig()
    start_time = time.time()
    path = Path(path)

    try:
        raster = load_raster(path, convert=config.convert_to_rgba)
        filled = fix_raster(raster, config)
        save_raster(raster, path)
    except BleedFixError as e:
        logger.warning(f"{path.name}: {e}")
        return FileResult(
            path=str(path),
            success=False,
            error=e.kind,
            message=str(e),
            elapsed=time.time() - start_time,
        )
    except Exception as e:
        logger.exception(f"Unexpected error fixing {path}")
        return FileResult(
            path=str(path),
            success=False,
            error="unexpected",
            message=f"Unexpected error: {e}",
            elapsed=time.time() - start_time,
        )

    elapsed = time.time() - start_time
    logger.info(f"Fixed {path.name}: {filled} pixels in {elapsed:.3f}s")

    return FileResult(
        path=str(path),
        success=True,
        message="Fixed",
        elapsed=elapsed,
        filled=filled,
    )


class BleedFixPipeline:
    """Alpha-bleed correction with a fixed configuration."""

    def __init__(self, config: Optional[FixConfig] = None):
        self.config = config or FixConfig()

    def process(self, input_path: Union[str, Path]) -> FileResult:
        """Fix one image file in place."""
        return process_file(input_path, self.config)

    def process_raster(self, raster: Raster) -> int:
        """Fix an in-memory raster in place, raising on failure."""
        return fix_raster(raster, self.config)
