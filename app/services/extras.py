import logging
from typing import Dict, Iterable

from app.core.enums import ExtraServiceCode, PricingModel
from app.core.exceptions import ExtraServiceNotConfigured
from app.schemas.pricing import ExtraServiceOut, ExtraServiceSelection, ExtrasCost

logger = logging.getLogger(__name__)

EXTRA_PRICING_MODELS = {
    ExtraServiceCode.LOADING: PricingModel.PER_UNIT,
    ExtraServiceCode.STAIRS: PricingModel.PER_UNIT,
    ExtraServiceCode.PACKING: PricingModel.FLAT,
    ExtraServiceCode.CLEANING: PricingModel.FLAT,
    ExtraServiceCode.EXPRESS: PricingModel.FLAT,
    ExtraServiceCode.INSURANCE: PricingModel.PERCENTAGE,
    ExtraServiceCode.WAITING: PricingModel.PER_UNIT,
}


def flat_cost(price: float, selected: bool) -> float:
    return price if selected else 0.0


def per_unit_cost(price: float, quantity: int) -> float:
    return price * quantity if quantity > 0 else 0.0


def percentage_cost(percentage_points: float, declared_value: float) -> float:
    return round(declared_value * percentage_points / 100, 2)


class ExtrasCalculator:
    """Itemised costs of the optional services on a booking.

    Every recognised extra must have a definition of the expected pricing
    model; anything else is a configuration error raised on construction.
    """

    def __init__(self, definitions: Iterable[ExtraServiceOut]):
        by_code: Dict[str, ExtraServiceOut] = {d.code: d for d in definitions}
        self.prices: Dict[ExtraServiceCode, float] = {}

        for code, model in EXTRA_PRICING_MODELS.items():
            definition = by_code.get(code.value)
            if definition is None:
                logger.error(f"Extra service {code} has no definition")
                raise ExtraServiceNotConfigured(code.value)
            if definition.price_type != model:
                logger.error(f"Extra service {code} is priced as {definition.price_type}, expected {model}")
                raise ExtraServiceNotConfigured(
                    code.value,
                    f"priced as {definition.price_type}, expected {model}",
                )
            self.prices[code] = definition.price

    def calculate(self, selection: ExtraServiceSelection) -> ExtrasCost:
        p = self.prices
        loading_people = max(1, selection.loading_people or 0) if selection.loading else 0
        insured_value = (
            selection.insurance_value
            if selection.insurance and selection.insurance_value
            else 0.0
        )

        return ExtrasCost(
            loading=per_unit_cost(p[ExtraServiceCode.LOADING], loading_people),
            stairs=per_unit_cost(p[ExtraServiceCode.STAIRS], selection.stairs),
            packing=flat_cost(p[ExtraServiceCode.PACKING], selection.packing),
            cleaning=flat_cost(p[ExtraServiceCode.CLEANING], selection.cleaning),
            express=flat_cost(p[ExtraServiceCode.EXPRESS], selection.express),
            insurance=percentage_cost(p[ExtraServiceCode.INSURANCE], insured_value),
            waiting_time=per_unit_cost(p[ExtraServiceCode.WAITING], selection.waiting_time or 0),
        )
