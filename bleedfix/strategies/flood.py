"""Flood averaging fill strategy."""
import logging
import numpy as np

from bleedfix.types import Raster, BorderClassification, PixelStage
from bleedfix.border import NEIGHBORS

logger = logging.getLogger(__name__)

_DX = np.array([dx for dx, _ in NEIGHBORS], dtype=np.int64)
_DY = np.array([dy for _, dy in NEIGHBORS], dtype=np.int64)

_UNPROCESSED = int(PixelStage.UNPROCESSED)
_STAGED = int(PixelStage.STAGED)
_PROCESSED = int(PixelStage.PROCESSED)


def seed_frontier(stages: np.ndarray, border: BorderClassification) -> np.ndarray:
    """
    Stage the first unprocessed neighbor of every processed pixel.

    Only border pixels can have an unprocessed neighbor, so they are the
    only processed pixels scanned. Marks the seeds STAGED in ``stages``.

    Args:
        stages: Flat (W*H,) stage array, modified in place
        border: Classification of the raster

    Returns:
        Flat indices of the first frontier, in discovery order
    """
    width, height = border.width, border.height
    frontier = []

    for flat in border.border_index.tolist():
        x, y = flat % width, flat // width
        for dx, dy in NEIGHBORS:
            nx, ny = x + dx, y + dy
            if nx < 0 or ny < 0 or nx >= width or ny >= height:
                continue
            neighbor = ny * width + nx
            if stages[neighbor] == _UNPROCESSED:
                stages[neighbor] = _STAGED
                frontier.append(neighbor)
                break

    return np.array(frontier, dtype=np.int64)


def _advance(
    frontier: np.ndarray,
    stages: np.ndarray,
    rgb: np.ndarray,
    width: int,
    height: int
) -> np.ndarray:
    """Average one frontier ring and return the next one."""
    fx = frontier % width
    fy = frontier // width

    nx = fx[:, None] + _DX[None, :]
    ny = fy[:, None] + _DY[None, :]
    valid = (nx >= 0) & (nx < width) & (ny >= 0) & (ny < height)
    neighbors = np.where(valid, ny * width + nx, 0)
    neighbor_stages = stages[neighbors]

    processed = valid & (neighbor_stages == _PROCESSED)
    counts = processed.sum(axis=1)
    sums = (rgb[neighbors].astype(np.uint32) * processed[..., None]).sum(axis=1)

    has_source = counts > 0
    # Truncating integer mean, per channel
    means = sums[has_source] // counts[has_source, None]

    # Every average of this ring is computed before any pixel is promoted
    rgb[frontier[has_source]] = means.astype(np.uint8)

    unprocessed = valid & (neighbor_stages == _UNPROCESSED)
    candidates = neighbors[unprocessed]
    _, first_seen = np.unique(candidates, return_index=True)
    next_frontier = candidates[np.sort(first_seen)]

    stages[next_frontier] = _STAGED
    stages[frontier] = _PROCESSED

    return next_frontier


def fill_flood(
    raster: Raster,
    border: BorderClassification,
    debug: bool = False
) -> np.ndarray:
    """
    Fill transparent pixels ring by ring with neighbor averages.

    Each ring of staged pixels takes the integer mean of its already
    processed neighbors, then becomes processed itself, until no pixel is
    left. Every pixel ends fully opaque.

    Args:
        raster: Source raster (not modified)
        border: Classification of the raster
        debug: Unused; this strategy always solidifies alpha

    Returns:
        Filled copy of the raster pixels
    """
    width, height = raster.width, raster.height
    filled = raster.pixels.copy()
    rgb = filled.reshape(-1, 4)[:, :3]

    stages = np.where(
        raster.alpha.reshape(-1) > 0, _PROCESSED, _UNPROCESSED
    ).astype(np.uint8)

    frontier = seed_frontier(stages, border)

    rounds = 0
    while len(frontier) > 0:
        frontier = _advance(frontier, stages, rgb, width, height)
        rounds += 1

    filled[..., 3] = 255

    remaining = int(np.count_nonzero(stages == _UNPROCESSED))
    logger.debug(f"Flood fill: {rounds} rings, {remaining} pixels unreachable")

    return filled
