"""Alpha-bleed correction for RGBA images."""
from bleedfix.types import (
    Raster,
    BorderClassification,
    FixConfig,
    FillStrategyKind,
    FileResult,
    BatchResult,
    BleedFixError,
    FormatError,
    NoBorderPixelsError,
    IndexConstructionError,
    EncodeError,
)
from bleedfix.border import classify_border_pixels
from bleedfix.pipeline import fix_raster, process_file, BleedFixPipeline
from bleedfix.batch import run_batch

__all__ = [
    "Raster",
    "BorderClassification",
    "FixConfig",
    "FillStrategyKind",
    "FileResult",
    "BatchResult",
    "BleedFixError",
    "FormatError",
    "NoBorderPixelsError",
    "IndexConstructionError",
    "EncodeError",
    "classify_border_pixels",
    "fix_raster",
    "process_file",
    "BleedFixPipeline",
    "run_batch",
]
