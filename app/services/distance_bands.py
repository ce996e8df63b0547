import math
from typing import Optional, Sequence

from app.core.exceptions import NoDistanceBandFound
from app.schemas.pricing import DistanceBandOut


def band_contains(band: DistanceBandOut, distance: float) -> bool:
    # Both bounds inclusive; a null max_km is open ended
    if distance < band.min_km:
        return False
    return band.max_km is None or distance <= band.max_km


def resolve_distance_band(distance: float, bands: Sequence[DistanceBandOut]) -> DistanceBandOut:
    """Return the band a distance falls in.

    A distance sitting on a shared boundary (5 km with bands 0-5 and 5-10)
    matches both; the band with the smallest ``min_km`` wins. NaN and
    infinite distances belong to no band.
    """
    if not math.isfinite(distance):
        raise NoDistanceBandFound(distance)
    candidates = [band for band in bands if band_contains(band, distance)]
    if not candidates:
        raise NoDistanceBandFound(distance)
    return min(candidates, key=lambda band: band.min_km)


def table_max_distance(bands: Sequence[DistanceBandOut]) -> Optional[float]:
    """Largest finite upper bound of the band set, or None when there is none."""
    bounded = [band.max_km for band in bands if band.max_km is not None]
    return max(bounded) if bounded else None
