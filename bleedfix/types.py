"""Core types for the alpha-bleed correction pipeline."""
from dataclasses import dataclass, field
from typing import Optional, List, Set, Tuple
from enum import Enum, IntEnum
import numpy as np


class FillStrategyKind(Enum):
    """Available fill strategies."""
    NEAREST = "nearest"
    FLOOD = "flood"


class PixelStage(IntEnum):
    """Per-pixel stage used by the flood strategy."""
    UNPROCESSED = 0
    STAGED = 1
    PROCESSED = 2


class BleedFixError(Exception):
    """Base exception for alpha-bleed correction errors."""
    kind = "error"


class FormatError(BleedFixError):
    """Raster is unreadable or not 8-bit RGBA."""
    kind = "format"


class NoBorderPixelsError(BleedFixError):
    """Nothing to fix: no opaque pixel touches a transparent one."""
    kind = "no_border_pixels"


class IndexConstructionError(BleedFixError):
    """Spatial index could not be built from the border points."""
    kind = "index"


class EncodeError(BleedFixError):
    """Fixed raster could not be written back."""
    kind = "encode"


@dataclass
class Raster:
    """Decoded 8-bit RGBA image, pixels shaped (H, W, 4)."""
    pixels: np.ndarray
    path: str = ""
    format: str = "PNG"

    def __post_init__(self):
        if not isinstance(self.pixels, np.ndarray) or self.pixels.dtype != np.uint8:
            raise FormatError("Raster pixels must be a uint8 numpy array")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise FormatError(f"Expected (H, W, 4) RGBA pixels, got shape {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise FormatError("Raster must have non-zero width and height")

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]


@dataclass
class BorderClassification:
    """Border points and transparent targets of one raster."""
    width: int
    height: int
    border_index: np.ndarray          # flat y*W+x of each border point, discovery order
    border_coords: np.ndarray         # (N, 2) int (x, y), same order
    color_lookup: np.ndarray          # (W*H, 3) uint8 RGB, indexed by y*W+x
    border_mask: np.ndarray           # (H, W) bool
    transparent_coords: np.ndarray    # (M, 2) int (x, y), row-major

    @property
    def border_count(self) -> int:
        return len(self.border_index)

    @property
    def transparent_count(self) -> int:
        return len(self.transparent_coords)

    def color_at(self, x: int, y: int) -> Tuple[int, int, int]:
        """RGB recorded for a border point."""
        r, g, b = self.color_lookup[y * self.width + x]
        return int(r), int(g), int(b)


@dataclass
class FixConfig:
    """Configuration for a fix run."""
    strategy: FillStrategyKind = FillStrategyKind.NEAREST
    # Nearest strategy writes alpha 255 into filled pixels to visualize them
    debug: bool = False

    # Performance
    parallel_workers: int = -1  # -1 = auto

    # Input
    convert_to_rgba: bool = False
    extensions: Set[str] = field(default_factory=lambda: {".png"})


@dataclass
class FileResult:
    """Outcome of processing one file."""
    path: str
    success: bool
    error: Optional[str] = None
    message: str = ""
    elapsed: float = 0.0
    filled: int = 0


@dataclass
class BatchResult:
    """Counters and per-file results of one batch run."""
    total: int = 0
    fixed: int = 0
    failed: int = 0
    elapsed: float = 0.0
    results: List[FileResult] = field(default_factory=list)

    def record(self, result: FileResult) -> None:
        self.results.append(result)
        if result.success:
            self.fixed += 1
        else:
            self.failed += 1
