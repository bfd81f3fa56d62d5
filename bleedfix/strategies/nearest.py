"""Nearest border point fill strategy."""
import logging
import numpy as np
from scipy.spatial import cKDTree

from bleedfix.types import Raster, BorderClassification, IndexConstructionError

logger = logging.getLogger(__name__)


def build_border_index(border: BorderClassification) -> cKDTree:
    """
    Build a spatial index over the border point coordinates.

    Raises:
        IndexConstructionError: If the point set is empty or not finite
    """
    points = border.border_coords.astype(np.float64)

    if len(points) == 0:
        raise IndexConstructionError("Cannot build spatial index without border points")

    if not np.all(np.isfinite(points)):
        raise IndexConstructionError("Border point coordinates are not finite")

    try:
        return cKDTree(points)
    except (ValueError, RuntimeError) as e:
        raise IndexConstructionError(f"Failed to create spatial index: {e}")


def fill_nearest(
    raster: Raster,
    border: BorderClassification,
    debug: bool = False
) -> np.ndarray:
    """
    Give every transparent pixel the color of its nearest border pixel.

    Alpha of filled pixels stays 0 so compositing is unchanged; in debug
    mode it is set to 255 to make the fill visible.

    Args:
        raster: Source raster (not modified)
        border: Classification of the raster
        debug: Make filled pixels opaque

    Returns:
        Filled copy of the raster pixels
    """
    filled = raster.pixels.copy()

    if border.transparent_count == 0:
        return filled

    tree = build_border_index(border)

    targets = border.transparent_coords
    _, nearest = tree.query(targets.astype(np.float64), k=1)

    nearest_x = border.border_coords[nearest, 0]
    nearest_y = border.border_coords[nearest, 1]
    colors = border.color_lookup[nearest_y * border.width + nearest_x]

    xs, ys = targets[:, 0], targets[:, 1]
    filled[ys, xs, :3] = colors
    filled[ys, xs, 3] = 255 if debug else 0

    logger.debug(f"Nearest fill: {len(targets)} pixels from {border.border_count} border points")

    return filled
