import numpy as np
import pytest
from rasterio.io import MemoryFile


def _blocks(*colors):
    """One RGBA pixel per (rgb, count) pair, laid out as a single row."""
    pixels = []
    for color, count in colors:
        rgba = tuple(color) + ((255,) if len(color) == 3 else ())
        pixels.extend([rgba] * count)
    return np.array([pixels], dtype=np.uint8)


def _encode(raster, driver="GTiff", dtype="uint8", nodata=None, colormap=None):
    if raster.ndim == 2:
        raster = raster[..., np.newaxis]
    height, width, count = raster.shape

    with MemoryFile() as memfile:
        with memfile.open(
            driver=driver,
            height=height,
            width=width,
            count=count,
            dtype=dtype,
            nodata=nodata,
        ) as dst:
            dst.write(np.moveaxis(raster, -1, 0).astype(dtype))
            if colormap is not None:
                dst.write_colormap(1, colormap)
        return memfile.read()


def _geotiff(raster, dtype="uint8", nodata=None):
    return _encode(raster, dtype=dtype, nodata=nodata)


def _png(raster):
    return _encode(raster, driver="PNG")


def _palette(raster, driver="GTiff"):
    """Encode an RGBA raster as one band of palette indices plus its colour table."""
    colors, indices = np.unique(raster.reshape(-1, raster.shape[-1]), axis=0, return_inverse=True)
    colormap = {i: tuple(int(channel) for channel in color) for i, color in enumerate(colors)}
    return _encode(indices.reshape(raster.shape[:2]), driver=driver, colormap=colormap)


@pytest.fixture
def make_raster():
    return _blocks


@pytest.fixture
def encode_geotiff():
    return _geotiff


@pytest.fixture
def encode_png():
    return _png


@pytest.fixture
def encode_palette():
    return _palette
