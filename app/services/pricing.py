import logging
from typing import Optional

from app.core.config import settings
from app.core.enums import EstimateOutcome
from app.core.exceptions import MissingDistanceInput, RequiresCustomQuote
from app.core.metrics import price_estimates
from app.schemas.pricing import PriceEstimateRequest, PriceEstimate, PriceBreakdown, PriceTable
from app.services.catalog import PricingCatalog
from app.services.distance_bands import resolve_distance_band, table_max_distance
from app.services.extras import ExtrasCalculator
from app.services.geo import distance_between
from app.services.rate_table import RateTable, Fare, NeedsCustomQuote, fare_from_rate

logger = logging.getLogger(__name__)

CUSTOM_QUOTE_LABEL = "Custom Quote"


def resolve_distance(req: PriceEstimateRequest) -> float:
    if req.distance is not None:
        return req.distance
    if req.pickup_location is not None and req.dropoff_location is not None:
        return distance_between(req.pickup_location, req.dropoff_location)
    raise MissingDistanceInput()


class PriceEstimator:
    """Turns a price estimate request into a price breakdown.

    Holds no per-request state; one instance can serve concurrent requests
    as long as its catalog is read-only.
    """

    def __init__(self, catalog: PricingCatalog, max_distance_km: Optional[float] = None):
        self.catalog = catalog
        self.max_distance_km = max_distance_km if max_distance_km is not None else settings.MAX_TABLE_DISTANCE_KM

    async def estimate(self, req: PriceEstimateRequest) -> PriceEstimate:
        try:
            result = await self._estimate(req)
        except RequiresCustomQuote:
            price_estimates.labels(outcome=EstimateOutcome.CUSTOM_QUOTE.value).inc()
            raise
        except Exception:
            price_estimates.labels(outcome=EstimateOutcome.ERROR.value).inc()
            raise
        price_estimates.labels(outcome=EstimateOutcome.PRICED.value).inc()
        return result

    async def _estimate(self, req: PriceEstimateRequest) -> PriceEstimate:
        distance = resolve_distance(req)

        bands = await self.catalog.get_distance_bands()
        band = resolve_distance_band(distance, bands)

        max_distance = self.max_distance_km
        if max_distance is None:
            max_distance = table_max_distance(bands)
        rate_table = RateTable(self.catalog, max_distance)

        fare = await rate_table.lookup(req.vehicle_class_id, band, distance)
        if isinstance(fare, NeedsCustomQuote):
            logger.info(
                f"Custom quote required for {req.vehicle_class_id} over {distance:.1f} km ({fare.reason})"
            )
            raise RequiresCustomQuote(fare.reason, distance)

        calculator = ExtrasCalculator(await self.catalog.get_extra_service_definitions())
        extras = calculator.calculate(req.extra_services)

        breakdown = PriceBreakdown(
            base_fare=fare.amount,
            extras=extras,
            total=fare.amount + extras.total,
        )
        return PriceEstimate(distance=distance, distance_band=band, price_breakdown=breakdown)


async def estimate_price(req: PriceEstimateRequest, catalog: PricingCatalog) -> PriceEstimate:
    return await PriceEstimator(catalog).estimate(req)


async def build_price_table(catalog: PricingCatalog) -> PriceTable:
    """Distance bands as rows, vehicle classes as columns."""
    vehicle_classes = await catalog.get_vehicle_classes()
    bands = await catalog.get_distance_bands()
    rates = {
        (rate.vehicle_class_id, rate.distance_band_id): rate.base_fare
        for rate in await catalog.get_pricing_rates()
    }

    table = []
    for band in bands:
        row = {"id": band.id, "distanceBand": band.label}
        for vehicle in vehicle_classes:
            base_fare = rates.get((vehicle.id, band.id))
            fare = fare_from_rate(base_fare) if base_fare is not None else None
            row[vehicle.name] = fare.amount if isinstance(fare, Fare) else CUSTOM_QUOTE_LABEL
        table.append(row)
    return table
