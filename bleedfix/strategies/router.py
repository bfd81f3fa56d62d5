"""Strategy router for selecting the fill strategy."""
import logging
from typing import Callable, Union

import numpy as np

from bleedfix.types import Raster, BorderClassification, FillStrategyKind
from bleedfix.strategies.nearest import fill_nearest
from bleedfix.strategies.flood import fill_flood

logger = logging.getLogger(__name__)

# fill(raster, border, debug) -> filled copy of the pixels
FillStrategy = Callable[[Raster, BorderClassification, bool], np.ndarray]

_STRATEGIES = {
    FillStrategyKind.NEAREST: fill_nearest,
    FillStrategyKind.FLOOD: fill_flood,
}


def get_strategy_for_kind(kind: Union[FillStrategyKind, str]) -> FillStrategy:
    """Get the fill function for a strategy kind (nearest if unknown)."""
    if isinstance(kind, str):
        try:
            kind = FillStrategyKind(kind.lower())
        except ValueError:
            logger.warning(f"Unknown fill strategy '{kind}', using nearest")
            return fill_nearest

    return _STRATEGIES.get(kind, fill_nearest)
