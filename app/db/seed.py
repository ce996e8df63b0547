import logging
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.data.reference import VEHICLE_CLASSES, DISTANCE_BANDS, EXTRA_SERVICES, generate_pricing_rates
from app.models.pricing import VehicleClass, DistanceBand, PricingRate, ExtraService

logger = logging.getLogger(__name__)


async def seed_reference_data(db: AsyncSession) -> Dict[str, int]:
    """Upsert the reference pricing data, keyed by id.

    Rates without a fare are stored with the 0 sentinel so the table stays
    complete.
    """
    counts = {}

    logger.info("Seeding vehicle classes...")
    for vehicle in VEHICLE_CLASSES:
        await db.merge(VehicleClass(**vehicle.model_dump()))
    counts["vehicle_classes"] = len(VEHICLE_CLASSES)

    logger.info("Seeding distance bands...")
    for band in DISTANCE_BANDS:
        await db.merge(DistanceBand(**band.model_dump()))
    counts["distance_bands"] = len(DISTANCE_BANDS)

    # Parents must exist before rates reference them
    await db.flush()

    logger.info("Seeding pricing rates...")
    rates = generate_pricing_rates()
    for rate in rates:
        await db.merge(PricingRate(**rate.model_dump()))
    counts["pricing_rates"] = len(rates)

    logger.info("Seeding extra services...")
    for service in EXTRA_SERVICES:
        await db.merge(ExtraService(**service.model_dump()))
    counts["extra_services"] = len(EXTRA_SERVICES)

    await db.commit()
    logger.info(f"Seeding complete: {counts}")
    return counts
