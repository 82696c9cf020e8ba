import warnings
from typing import Mapping, Sequence

import numpy as np
from rasterio.enums import ColorInterp
from rasterio.errors import NotGeoreferencedWarning, RasterioError
from rasterio.io import MemoryFile

from app.core.exceptions import RasterDecodeError


def decode_raster(raster_bytes: bytes) -> np.ndarray:
    """
    Decode rendered index imagery (PNG, JPEG, GeoTIFF...) into an
    (height, width, 4) uint8 RGBA array.

    Band layouts: 1 = grey, or palette indices when the band carries a
    colour table, 2 = grey + alpha, 3 = RGB (fully opaque), 4 or more = RGBA
    (extra bands ignored).
    """
    if not raster_bytes:
        raise RasterDecodeError("Empty raster payload")

    try:
        with warnings.catch_warnings():
            # Rendered previews carry no georeferencing
            warnings.simplefilter("ignore", NotGeoreferencedWarning)
            with MemoryFile(raster_bytes) as memfile:
                with memfile.open() as src:
                    bands = src.read()
                    colormap = None
                    if src.colorinterp and src.colorinterp[0] == ColorInterp.palette:
                        colormap = src.colormap(1)
    except (RasterioError, ValueError) as exc:
        # ValueError: palette band without a colour table
        raise RasterDecodeError(f"Failed to decode raster: {exc}") from exc

    if colormap is not None:
        return expand_palette(bands[0], colormap)
    return to_rgba(bands)


def expand_palette(indices: np.ndarray, colormap: Mapping[int, Sequence[int]]) -> np.ndarray:
    """Look palette indices up in their colour table; unlisted indices are transparent."""
    size = max(256, int(indices.max(initial=0)) + 1, max(colormap, default=0) + 1)
    lut = np.zeros((size, 4), dtype=np.uint8)
    for index, color in colormap.items():
        rgba = tuple(color) + (255,) * (4 - len(color))
        lut[index] = rgba[:4]

    return lut[indices.astype(np.intp)]


def to_rgba(bands: np.ndarray) -> np.ndarray:
    """Convert a (bands, height, width) array as read by rasterio into RGBA."""
    count = bands.shape[0]
    if count == 0:
        raise RasterDecodeError("Raster has no bands")

    bands = np.clip(bands, 0, 255).astype(np.uint8)
    opaque = np.full(bands.shape[1:], 255, dtype=np.uint8)

    if count == 1:
        grey = bands[0]
        stacked = [grey, grey, grey, opaque]
    elif count == 2:
        grey, alpha = bands[0], bands[1]
        stacked = [grey, grey, grey, alpha]
    elif count == 3:
        stacked = [bands[0], bands[1], bands[2], opaque]
    else:
        stacked = [bands[0], bands[1], bands[2], bands[3]]

    return np.stack(stacked, axis=-1)


def read_bands(raster_bytes: bytes) -> np.ndarray:
    """Read every band as float32 (bands, height, width); nodata becomes NaN."""
    if not raster_bytes:
        raise RasterDecodeError("Empty raster payload")

    try:
        with MemoryFile(raster_bytes) as memfile:
            with memfile.open() as src:
                data = src.read(masked=True)
    except RasterioError as exc:
        raise RasterDecodeError(f"Failed to decode band raster: {exc}") from exc

    return data.astype("float32").filled(np.nan)


def normalized_difference(first: np.ndarray, second: np.ndarray) -> np.ndarray:
    first = first.astype("float32")
    second = second.astype("float32")

    # Zero-sum pixels come out as NaN and are skipped downstream
    with np.errstate(divide="ignore", invalid="ignore"):
        return (first - second) / (first + second)


def compute_index(raster_bytes: bytes, first_band: int, second_band: int) -> np.ndarray:
    """
    Per-pixel (first - second) / (first + second) from a multi-band raster.
    Band numbers are 1-based like rasterio's.
    """
    bands = read_bands(raster_bytes)
    count = bands.shape[0]
    for band in (first_band, second_band):
        if not 1 <= band <= count:
            raise RasterDecodeError(f"Band {band} out of range, raster has {count} band(s)")

    return normalized_difference(bands[first_band - 1], bands[second_band - 1])
