"""Fill strategies for transparent pixels."""
from bleedfix.strategies.nearest import fill_nearest
from bleedfix.strategies.flood import fill_flood
from bleedfix.strategies.router import get_strategy_for_kind

__all__ = ["fill_nearest", "fill_flood", "get_strategy_for_kind"]
