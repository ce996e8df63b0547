"""Pricing catalog and price estimate endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_catalog
from app.core.exceptions import PricingError, RequiresCustomQuote
from app.core.response_builders import build_pricing_error_response, build_custom_quote_response
from app.schemas.pricing import (
    PriceEstimateRequest,
    PriceEstimate,
    PriceTable,
    VehicleClassOut,
    DistanceBandOut,
    ExtraServiceOut,
)
from app.services.catalog import PricingCatalog
from app.services.pricing import PriceEstimator, build_price_table

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/vehicle-classes", response_model=List[VehicleClassOut])
async def list_vehicle_classes(catalog: PricingCatalog = Depends(get_catalog)):
    return await catalog.get_vehicle_classes()


@router.get("/distance-bands", response_model=List[DistanceBandOut])
async def list_distance_bands(catalog: PricingCatalog = Depends(get_catalog)):
    return await catalog.get_distance_bands()


@router.get("/extra-services", response_model=List[ExtraServiceOut])
async def list_extra_services(catalog: PricingCatalog = Depends(get_catalog)):
    return await catalog.get_extra_service_definitions()


@router.get("/price-table", response_model=PriceTable)
async def price_table(catalog: PricingCatalog = Depends(get_catalog)):
    return await build_price_table(catalog)


@router.post("/estimate", response_model=PriceEstimate)
async def estimate(req: PriceEstimateRequest, catalog: PricingCatalog = Depends(get_catalog)):
    try:
        return await PriceEstimator(catalog).estimate(req)
    except RequiresCustomQuote as e:
        return build_custom_quote_response(e)
    except PricingError as e:
        if e.status_code >= 500:
            logger.error(f"Price estimate failed: {e.message}")
        else:
            logger.warning(f"Price estimate rejected: {e.message}")
        return build_pricing_error_response(e)
