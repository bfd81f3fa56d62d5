"""Border pixel classification."""
import logging
import numpy as np
from scipy.ndimage import binary_dilation

from bleedfix.types import Raster, BorderClassification, NoBorderPixelsError

logger = logging.getLogger(__name__)

# Moore neighborhood, diagonals included
NEIGHBORS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
)

_MOORE = np.ones((3, 3), dtype=bool)


def find_border_mask(alpha: np.ndarray) -> np.ndarray:
    """
    Mark opaque pixels that touch a fully transparent pixel.

    Out-of-bounds neighbors count as non-transparent, so image edges
    never make a pixel a border pixel on their own.

    Args:
        alpha: (H, W) alpha channel

    Returns:
        (H, W) boolean mask of border pixels
    """
    transparent = alpha == 0
    near_transparent = binary_dilation(transparent, structure=_MOORE, border_value=0)
    return near_transparent & ~transparent


def classify_border_pixels(raster: Raster) -> BorderClassification:
    """
    Partition a raster into border points and transparent targets.

    Args:
        raster: Decoded RGBA raster

    Returns:
        BorderClassification with border points in row-major discovery order

    Raises:
        NoBorderPixelsError: If no opaque pixel is adjacent to a transparent one
    """
    width, height = raster.width, raster.height
    alpha = raster.alpha

    border_mask = find_border_mask(alpha)
    border_index = np.flatnonzero(border_mask)

    if len(border_index) == 0:
        raise NoBorderPixelsError(
            f"No transparent pixels to fix: {raster.path or '<array>'}"
        )

    border_coords = np.stack(
        [border_index % width, border_index // width], axis=1
    ).astype(np.int64)

    ys, xs = np.nonzero(alpha == 0)
    transparent_coords = np.stack([xs, ys], axis=1).astype(np.int64)

    color_lookup = raster.pixels[..., :3].reshape(-1, 3).copy()

    logger.debug(
        f"{raster.path or '<array>'}: {len(border_index)} border pixels, "
        f"{len(transparent_coords)} transparent pixels ({width}x{height})"
    )

    return BorderClassification(
        width=width,
        height=height,
        border_index=border_index,
        border_coords=border_coords,
        color_lookup=color_lookup,
        border_mask=border_mask,
        transparent_coords=transparent_coords,
    )
