"""Read-only access to the pricing reference tables.

The estimator only talks to a ``PricingCatalog``. Two implementations ship:
one over the in-process reference data and one over the database tables.
"""
import logging
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.enums import PricingSource
from app.core.metrics import track_catalog_lookup
from app.data.reference import VEHICLE_CLASSES, DISTANCE_BANDS, EXTRA_SERVICES, generate_pricing_rates
from app.models.pricing import VehicleClass, DistanceBand, PricingRate, ExtraService
from app.schemas.pricing import VehicleClassOut, DistanceBandOut, PricingRateOut, ExtraServiceOut

logger = logging.getLogger(__name__)


class PricingCatalog(Protocol):
    source: PricingSource

    async def get_vehicle_classes(self) -> List[VehicleClassOut]: ...

    async def get_distance_bands(self) -> List[DistanceBandOut]: ...

    async def get_extra_service_definitions(self) -> List[ExtraServiceOut]: ...

    async def get_rate(self, vehicle_class_id: str, distance_band_id: str) -> Optional[PricingRateOut]: ...

    async def get_pricing_rates(self) -> List[PricingRateOut]: ...


class InMemoryPricingCatalog:
    source = PricingSource.MEMORY

    def __init__(
        self,
        vehicle_classes: Sequence[VehicleClassOut],
        distance_bands: Sequence[DistanceBandOut],
        pricing_rates: Sequence[PricingRateOut],
        extra_services: Sequence[ExtraServiceOut],
    ):
        self._vehicle_classes = tuple(sorted(vehicle_classes, key=lambda v: v.order))
        self._distance_bands = tuple(sorted(distance_bands, key=lambda b: b.min_km))
        self._extra_services = tuple(extra_services)
        self._pricing_rates = tuple(pricing_rates)
        self._rates: Dict[Tuple[str, str], PricingRateOut] = {}
        for rate in self._pricing_rates:
            key = (rate.vehicle_class_id, rate.distance_band_id)
            if key in self._rates:
                raise ValueError(f"Duplicate pricing rate for {key}")
            self._rates[key] = rate

    @classmethod
    def from_reference_data(cls) -> "InMemoryPricingCatalog":
        return cls(
            vehicle_classes=VEHICLE_CLASSES,
            distance_bands=DISTANCE_BANDS,
            pricing_rates=generate_pricing_rates(),
            extra_services=EXTRA_SERVICES,
        )

    @track_catalog_lookup("vehicle_classes")
    async def get_vehicle_classes(self) -> List[VehicleClassOut]:
        return list(self._vehicle_classes)

    @track_catalog_lookup("distance_bands")
    async def get_distance_bands(self) -> List[DistanceBandOut]:
        return list(self._distance_bands)

    @track_catalog_lookup("extra_services")
    async def get_extra_service_definitions(self) -> List[ExtraServiceOut]:
        return list(self._extra_services)

    @track_catalog_lookup("rate")
    async def get_rate(self, vehicle_class_id: str, distance_band_id: str) -> Optional[PricingRateOut]:
        return self._rates.get((vehicle_class_id, distance_band_id))

    @track_catalog_lookup("pricing_rates")
    async def get_pricing_rates(self) -> List[PricingRateOut]:
        return list(self._pricing_rates)


class SqlPricingCatalog:
    source = PricingSource.DATABASE

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_catalog_lookup("vehicle_classes")
    async def get_vehicle_classes(self) -> List[VehicleClassOut]:
        res = await self.db.execute(select(VehicleClass).order_by(VehicleClass.order))
        return [VehicleClassOut.model_validate(row) for row in res.scalars().all()]

    @track_catalog_lookup("distance_bands")
    async def get_distance_bands(self) -> List[DistanceBandOut]:
        res = await self.db.execute(select(DistanceBand).order_by(DistanceBand.min_km))
        return [DistanceBandOut.model_validate(row) for row in res.scalars().all()]

    @track_catalog_lookup("extra_services")
    async def get_extra_service_definitions(self) -> List[ExtraServiceOut]:
        res = await self.db.execute(select(ExtraService).order_by(ExtraService.code))
        return [ExtraServiceOut.model_validate(row) for row in res.scalars().all()]

    @track_catalog_lookup("rate")
    async def get_rate(self, vehicle_class_id: str, distance_band_id: str) -> Optional[PricingRateOut]:
        res = await self.db.execute(
            select(PricingRate).where(
                PricingRate.vehicle_class_id == vehicle_class_id,
                PricingRate.distance_band_id == distance_band_id,
            )
        )
        rate = res.scalars().first()
        if rate is None:
            logger.debug(f"No pricing rate row for {vehicle_class_id}/{distance_band_id}")
            return None
        return PricingRateOut.model_validate(rate)

    @track_catalog_lookup("pricing_rates")
    async def get_pricing_rates(self) -> List[PricingRateOut]:
        res = await self.db.execute(select(PricingRate))
        return [PricingRateOut.model_validate(row) for row in res.scalars().all()]


_reference_catalog: Optional[InMemoryPricingCatalog] = None


def get_reference_catalog() -> InMemoryPricingCatalog:
    global _reference_catalog
    if _reference_catalog is None:
        _reference_catalog = InMemoryPricingCatalog.from_reference_data()
    return _reference_catalog
