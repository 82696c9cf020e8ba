"""
Pixel classifiers that map a raster onto legend buckets.

Both classifiers expose ``legend`` and ``label(raster)`` so the aggregator
does not care whether buckets come from rendered colours or raw index values.
"""

from typing import Optional, Protocol, Sequence, Tuple

import numpy as np

from app.schemas.analysis import LegendEntry


ALPHA_THRESHOLD = 128
UNMATCHED = -1


class ZoneClassifier(Protocol):
    legend: Tuple[LegendEntry, ...]

    def label(self, raster: np.ndarray) -> np.ndarray:
        ...


def colors_match(rgb1: Sequence[int], rgb2: Sequence[int], tolerance: int) -> bool:
    return (
        abs(int(rgb1[0]) - int(rgb2[0])) <= tolerance
        and abs(int(rgb1[1]) - int(rgb2[1])) <= tolerance
        and abs(int(rgb1[2]) - int(rgb2[2])) <= tolerance
    )


def classify(
    pixel: Sequence[int],
    legend: Sequence[LegendEntry],
    tolerance: int,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> Optional[LegendEntry]:
    """
    Return the first legend entry within ``tolerance`` on every channel.

    Transparent pixels (alpha below ``alpha_threshold``) and pixels matching
    no entry return None.
    """
    if len(pixel) > 3 and pixel[3] < alpha_threshold:
        return None

    for entry in legend:
        if colors_match(pixel, entry.rgb, tolerance):
            return entry

    return None


class ColorLegendClassifier:
    """Vectorised ``classify`` over an (H, W, 3|4) uint8 raster."""

    def __init__(
        self,
        legend: Sequence[LegendEntry],
        tolerance: int,
        alpha_threshold: int = ALPHA_THRESHOLD,
    ):
        self.legend = tuple(legend)
        self.tolerance = tolerance
        self.alpha_threshold = alpha_threshold

    def label(self, raster: np.ndarray) -> np.ndarray:
        if raster.ndim != 3 or raster.shape[-1] < 3:
            raise ValueError(f"Expected an (H, W, 3|4) raster, got shape {raster.shape}")

        rgb = raster[..., :3].astype(np.int16)
        labels = np.full(raster.shape[:2], UNMATCHED, dtype=np.int32)

        if raster.shape[-1] > 3:
            pending = raster[..., 3] >= self.alpha_threshold
        else:
            pending = np.ones(raster.shape[:2], dtype=bool)

        # Earlier entries claim pixels first
        for i, entry in enumerate(self.legend):
            diff = np.abs(rgb - np.array(entry.rgb, dtype=np.int16))
            hit = pending & np.all(diff <= self.tolerance, axis=-1)
            labels[hit] = i
            pending &= ~hit

        return labels


class IndexValueClassifier:
    """Buckets a 2-D raster of raw index values by each entry's [index_min, index_max)."""

    def __init__(self, legend: Sequence[LegendEntry]):
        self.legend = tuple(legend)

    def label(self, raster: np.ndarray) -> np.ndarray:
        values = np.asarray(raster, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Expected a 2-D index raster, got shape {values.shape}")

        labels = np.full(values.shape, UNMATCHED, dtype=np.int32)
        pending = ~np.isnan(values)

        for i, entry in enumerate(self.legend):
            hit = pending.copy()
            if entry.index_min is not None:
                hit &= values >= entry.index_min
            if entry.index_max is not None:
                hit &= values < entry.index_max
            labels[hit] = i
            pending &= ~hit

        return labels
