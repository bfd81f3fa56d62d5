"""Raster decoding and encoding with Pillow."""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union
import numpy as np
from PIL import Image

from bleedfix.types import Raster, FormatError, EncodeError

logger = logging.getLogger(__name__)

# Raw decoder layouts wider than 8 bits per channel
_WIDE_RAWMODE_MARKERS = (";16", ";32")


def _wide_rawmode(img: Image.Image) -> Optional[str]:
    """Return the decoder rawmode if it carries more than 8 bits per channel."""
    for tile in img.tile:
        args = tile[3]
        rawmode = args[0] if isinstance(args, tuple) and args else args
        if isinstance(rawmode, str) and any(m in rawmode for m in _WIDE_RAWMODE_MARKERS):
            return rawmode
    return None


def load_raster(path: Union[str, Path], convert: bool = False) -> Raster:
    """
    Load an image file as an 8-bit RGBA raster.

    Args:
        path: Path to image file
        convert: Convert other modes to RGBA instead of rejecting them

    Returns:
        Raster with (H, W, 4) uint8 pixels

    Raises:
        FormatError: If the file cannot be read or is not RGBA
    """
    path = Path(path)

    if not path.is_file():
        raise FormatError(f"Image file not found: {path}")

    try:
        with Image.open(path) as img:
            image_format = img.format or "PNG"

            # Pillow narrows 16-bit RGBA to 8 bits on load, so check before decoding
            wide = _wide_rawmode(img)
            if wide is not None and not convert:
                raise FormatError(
                    f"Unsupported color depth! Expected 8-bit RGBA, got {wide}: {path}"
                )

            if img.mode != 'RGBA':
                if not convert:
                    raise FormatError(
                        f"Wrong color space! Expected RGBA, got {img.mode}: {path}"
                    )
                logger.debug(f"Converting {path.name} from {img.mode} to RGBA")
                img = img.convert('RGBA')

            pixels = np.array(img, dtype=np.uint8)

    except FormatError:
        raise
    except (IOError, OSError, Image.DecompressionBombError) as e:
        raise FormatError(f"Failed to load image {path}: {e}")

    return Raster(pixels=pixels, path=str(path), format=image_format)


def save_raster(raster: Raster, path: Optional[Union[str, Path]] = None) -> Path:
    """
    Encode a raster back to disk.

    Writes to a temporary file next to the target and moves it into place,
    so the original file is untouched if encoding fails.

    Args:
        raster: Raster to save
        path: Target path (default: the raster's source path)

    Returns:
        Path written

    Raises:
        EncodeError: If the raster cannot be encoded or written
    """
    target = Path(path or raster.path)
    if not str(target):
        raise EncodeError("No output path for raster")

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.stem}.", suffix=target.suffix, dir=target.parent
        )
        with os.fdopen(fd, 'wb') as handle:
            Image.fromarray(raster.pixels).save(handle, format=raster.format)
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
        tmp_name = None
    except (IOError, OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to save image \"{target}\": {e}")
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    return target


def raster_from_array(image: np.ndarray, path: str = "") -> Raster:
    """
    Create a Raster from a numpy array.

    Args:
        image: RGBA array (H, W, 4); float arrays in [0, 1] are scaled to uint8
        path: Optional path for reference

    Returns:
        Raster
    """
    image = np.asarray(image)

    if image.ndim != 3:
        raise FormatError(f"Expected 3D array, got {image.ndim}D")

    if image.shape[2] != 4:
        raise FormatError(f"Expected 4 channels, got {image.shape[2]}")

    if image.size == 0:
        raise FormatError("Raster must have non-zero width and height")

    if image.dtype != np.uint8:
        if np.issubdtype(image.dtype, np.floating) and image.max() <= 1.0:
            image = image * 255.0
        image = np.clip(np.rint(image), 0, 255).astype(np.uint8)

    return Raster(pixels=np.ascontiguousarray(image), path=path)
