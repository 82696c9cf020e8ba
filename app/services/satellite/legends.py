"""
Colour legends for index imagery rendered by the upstream imagery service.

The evaluation scripts on the provider side paint each pixel with a fixed
colour per index bucket; these tables decode those colours back into buckets.
Order matters: the first entry within tolerance wins.
"""

from typing import Tuple

from app.schemas.analysis import LegendEntry
from app.schemas.enums import VegetationStatus, WaterStressStatus


NDVI_LEGEND: Tuple[LegendEntry, ...] = (
    LegendEntry(rgb=(26, 152, 80), index_value=0.85, status=VegetationStatus.EXCELLENT.value,
                range_label="0.8-0.9", index_min=0.8, index_max=None),
    LegendEntry(rgb=(102, 189, 99), index_value=0.75, status=VegetationStatus.EXCELLENT.value,
                range_label="0.7-0.8", index_min=0.7, index_max=0.8),
    LegendEntry(rgb=(166, 217, 106), index_value=0.65, status=VegetationStatus.GOOD.value,
                range_label="0.6-0.7", index_min=0.6, index_max=0.7),
    LegendEntry(rgb=(217, 239, 139), index_value=0.55, status=VegetationStatus.GOOD.value,
                range_label="0.5-0.6", index_min=0.5, index_max=0.6),
    LegendEntry(rgb=(255, 255, 191), index_value=0.45, status=VegetationStatus.FAIR.value,
                range_label="0.4-0.5", index_min=0.4, index_max=0.5),
    LegendEntry(rgb=(254, 224, 139), index_value=0.35, status=VegetationStatus.FAIR.value,
                range_label="0.3-0.4", index_min=0.3, index_max=0.4),
    LegendEntry(rgb=(253, 174, 97), index_value=0.25, status=VegetationStatus.POOR.value,
                range_label="0.2-0.3", index_min=0.2, index_max=0.3),
    LegendEntry(rgb=(244, 109, 67), index_value=0.15, status=VegetationStatus.POOR.value,
                range_label="0.1-0.2", index_min=0.1, index_max=0.2),
    LegendEntry(rgb=(215, 48, 39), index_value=0.05, status=VegetationStatus.VERY_POOR.value,
                range_label="0-0.1", index_min=0.0, index_max=0.1),
    LegendEntry(rgb=(165, 0, 38), index_value=-0.05, status=VegetationStatus.VERY_POOR.value,
                range_label="<0", index_min=None, index_max=0.0),
)

NDVI_STATUS_ORDER: Tuple[str, ...] = (
    VegetationStatus.EXCELLENT.value,
    VegetationStatus.GOOD.value,
    VegetationStatus.FAIR.value,
    VegetationStatus.POOR.value,
    VegetationStatus.VERY_POOR.value,
)


# index_value is the bucket midpoint used for the average estimate and
# range_label is the reported range. index_min/index_max follow the cutoffs
# the renderer paints each colour at (-0.31, 0.1, 0.21), so raw-index and
# colour analyses of the same field land in the same buckets.
NDWI_LEGEND: Tuple[LegendEntry, ...] = (
    LegendEntry(rgb=(242, 201, 0), index_value=0.05, status=WaterStressStatus.HIGH.value,
                range_label="-0.1-0.1", index_min=None, index_max=-0.31),
    LegendEntry(rgb=(0, 255, 164), index_value=0.15, status=WaterStressStatus.MODERATE.value,
                range_label="0.1-0.2", index_min=-0.31, index_max=0.1),
    LegendEntry(rgb=(0, 119, 204), index_value=0.25, status=WaterStressStatus.LOW.value,
                range_label="0.2-0.3", index_min=0.1, index_max=0.21),
    LegendEntry(rgb=(178, 0, 255), index_value=0.4, status=WaterStressStatus.VERY_LOW.value,
                range_label="0.3+", index_min=0.21, index_max=None),
)

NDWI_STATUS_ORDER: Tuple[str, ...] = (
    WaterStressStatus.HIGH.value,
    WaterStressStatus.MODERATE.value,
    WaterStressStatus.LOW.value,
    WaterStressStatus.VERY_LOW.value,
)
