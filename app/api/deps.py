from typing import AsyncIterator

from app.core.config import settings
from app.core.enums import PricingSource
from app.db.session import get_sessionmaker
from app.services.catalog import PricingCatalog, SqlPricingCatalog, get_reference_catalog


async def get_catalog() -> AsyncIterator[PricingCatalog]:
    if settings.PRICING_SOURCE == PricingSource.DATABASE:
        async with get_sessionmaker()() as session:
            yield SqlPricingCatalog(session)
    else:
        yield get_reference_catalog()
