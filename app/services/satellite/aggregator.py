"""
Zone aggregation shared by the NDVI and NDWI engines.

A classifier labels every pixel with a legend index; this module turns the
labels into per-status zone summaries with percentage and hectare shares.
"""

import math
from typing import Dict, List, Sequence

import numpy as np

from app.schemas.analysis import IndexAnalysis, ZoneSummary
from app.services.satellite.classifier import ZoneClassifier


PERCENT_DECIMALS = 1
AREA_DECIMALS = 4
INDEX_DECIMALS = 2


def round_percentages(values: Sequence[float], decimals: int = PERCENT_DECIMALS) -> List[float]:
    """
    Round percentages with the largest-remainder method so the rounded values
    add up to the rounded total (100.0 for a full distribution).
    """
    if not values:
        return []

    scale = 10 ** decimals
    scaled = [value * scale for value in values]
    floors = [math.floor(s) for s in scaled]
    shortfall = int(round(sum(scaled))) - sum(floors)

    by_remainder = sorted(
        range(len(values)),
        key=lambda i: scaled[i] - floors[i],
        reverse=True,
    )
    for i in by_remainder[:max(shortfall, 0)]:
        floors[i] += 1

    return [f / scale for f in floors]


def _display_rank(status: str, status_order: Sequence[str]) -> int:
    try:
        return status_order.index(status)
    except ValueError:
        return len(status_order)


def aggregate(
    raster: np.ndarray,
    classifier: ZoneClassifier,
    farm_area_hectares: float,
    status_order: Sequence[str],
) -> IndexAnalysis:
    legend = classifier.legend
    labels = classifier.label(raster)

    matched = labels[labels >= 0]
    counts = np.bincount(matched.ravel(), minlength=len(legend))
    total = int(counts.sum())

    index_sum = 0.0
    index_min = 1.0
    index_max = -1.0

    for entry, count in zip(legend, counts):
        if count == 0:
            continue
        index_sum += entry.index_value * int(count)
        index_min = min(index_min, entry.index_value)
        index_max = max(index_max, entry.index_value)

    average = index_sum / total if total else 0.0

    # Merge legend buckets that share a status
    groups: Dict[str, dict] = {}
    for entry, count in zip(legend, counts):
        if count == 0:
            continue

        percentage = int(count) / total * 100
        area = percentage / 100 * farm_area_hectares

        group = groups.get(entry.status)
        if group is None:
            groups[entry.status] = {
                "percentage": percentage,
                "area": area,
                "range": entry.range_label,
                "largest": percentage,
            }
            continue

        group["percentage"] += percentage
        group["area"] += area
        if percentage > group["largest"]:
            group["largest"] = percentage
            group["range"] = entry.range_label

    ordered = sorted(groups.items(), key=lambda item: _display_rank(item[0], status_order))
    percentages = round_percentages([group["percentage"] for _, group in ordered])

    zones = [
        ZoneSummary(
            zone_id=zone_id,
            status=status,
            index_range=group["range"],
            area_percentage=percentage,
            area_hectares=round(group["area"], AREA_DECIMALS),
        )
        for zone_id, ((status, group), percentage) in enumerate(zip(ordered, percentages), start=1)
    ]

    return IndexAnalysis(
        average_index=round(average, INDEX_DECIMALS),
        min_index=round(index_min, INDEX_DECIMALS),
        max_index=round(index_max, INDEX_DECIMALS),
        zones=zones,
    )
