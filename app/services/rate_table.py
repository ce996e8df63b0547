from dataclasses import dataclass
from typing import Optional, Union
import logging

from app.core.enums import CustomQuoteReason
from app.core.exceptions import NoRateFound
from app.data.reference import CUSTOM_QUOTE_FARE
from app.schemas.pricing import DistanceBandOut
from app.services.catalog import PricingCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fare:
    amount: float


@dataclass(frozen=True)
class NeedsCustomQuote:
    reason: CustomQuoteReason


RateLookup = Union[Fare, NeedsCustomQuote]


def fare_from_rate(base_fare: float) -> RateLookup:
    """Tag a stored base fare; the 0 marker means no fare is defined."""
    if base_fare == CUSTOM_QUOTE_FARE:
        return NeedsCustomQuote(CustomQuoteReason.NO_FARE_DEFINED)
    return Fare(base_fare)


class RateTable:
    """Base fare lookup over a pricing catalog.

    Stored rows use a base fare of 0 to mark a band without a fare;
    :func:`fare_from_rate` turns that into ``NeedsCustomQuote`` so nothing
    downstream has to interpret the zero.
    """

    def __init__(self, catalog: PricingCatalog, max_distance_km: Optional[float] = None):
        self.catalog = catalog
        self.max_distance_km = max_distance_km

    def exceeds_table(self, distance: float) -> bool:
        return self.max_distance_km is not None and distance >= self.max_distance_km

    async def lookup(self, vehicle_class_id: str, band: DistanceBandOut, distance: float) -> RateLookup:
        if self.exceeds_table(distance):
            return NeedsCustomQuote(CustomQuoteReason.DISTANCE_EXCEEDS_TABLE)

        rate = await self.catalog.get_rate(vehicle_class_id, band.id)
        if rate is None:
            logger.error(f"Rate table has no entry for {vehicle_class_id} in band {band.id}")
            raise NoRateFound(vehicle_class_id, band.id)

        return fare_from_rate(rate.base_fare)
