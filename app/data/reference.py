"""Reference pricing data: vehicle classes, distance bands, extras and fares.

Fares are kept in one compact matrix, ``vehicle class -> fare per band``,
and expanded into rate rows by :func:`generate_pricing_rates`. ``None`` in
the matrix means no fare is defined for that band; it is stored as
``CUSTOM_QUOTE_FARE``.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from app.core.enums import PricingModel, ExtraServiceCode
from app.schemas.pricing import (
    VehicleClassOut,
    DistanceBandOut,
    PricingRateOut,
    ExtraServiceOut,
)

CUSTOM_QUOTE_FARE = 0.0


def _format_km(value: float) -> str:
    return f"{value:,.0f}".replace(",", " ")


def format_band_label(min_km: float, max_km: Optional[float]) -> str:
    """Label a band; both bounds are inclusive, ``None`` is open ended."""
    if max_km is None:
        return f"{_format_km(min_km)}+ km"
    return f"{_format_km(min_km)} – {_format_km(max_km)} km"


def build_distance_bands(bounds: Sequence[Tuple[float, Optional[float]]]) -> List[DistanceBandOut]:
    bands = []
    for min_km, max_km in bounds:
        suffix = f"{min_km:g}-{max_km:g}" if max_km is not None else f"{min_km:g}-plus"
        bands.append(DistanceBandOut(
            id=f"band-{suffix}",
            min_km=min_km,
            max_km=max_km,
            label=format_band_label(min_km, max_km),
        ))
    return bands


VEHICLE_CLASSES: List[VehicleClassOut] = [
    VehicleClassOut(id="mini-van", name="Mini-Van", capacity="<1 ton", max_weight=1000,
                    description="Perfect for small moves and deliveries", order=1),
    VehicleClassOut(id="1-ton-truck", name="1 Ton Truck", capacity="1 ton", max_weight=1000,
                    description="Ideal for small furniture and appliances", order=2),
    VehicleClassOut(id="1.5-ton-truck", name="1.5 Ton Truck", capacity="1.5 ton", max_weight=1500,
                    description="Great for studio apartments", order=3),
    VehicleClassOut(id="2-ton-truck", name="2 Ton Truck", capacity="2 ton", max_weight=2000,
                    description="Perfect for 1-2 bedroom moves", order=4),
    VehicleClassOut(id="4-ton-truck", name="4 Ton Truck", capacity="4 ton", max_weight=4000,
                    description="Suitable for 2-3 bedroom homes", order=5),
    VehicleClassOut(id="5-ton-truck", name="5 Ton Truck", capacity="5 ton", max_weight=5000,
                    description="Great for larger homes", order=6),
    VehicleClassOut(id="8-ton-truck", name="8 Ton Truck", capacity="8 ton", max_weight=8000,
                    description="For commercial and large moves", order=7),
    VehicleClassOut(id="10-ton-truck", name="10 Ton Truck", capacity="10 ton", max_weight=10000,
                    description="Heavy-duty commercial transport", order=8),
]

DISTANCE_BANDS: List[DistanceBandOut] = build_distance_bands([
    (0, 5), (5, 10), (10, 15), (15, 20), (20, 25), (25, 30),
    (30, 40), (40, 50), (50, 60), (60, 70), (70, 80), (80, 90), (90, 100),
    (100, 125), (125, 150), (150, 175), (175, 200),
    (200, 250), (250, 300), (300, 400), (400, 500), (500, 600),
    (600, 800), (800, 1000), (1000, None),
])

# ZAR per band, same order as DISTANCE_BANDS
FARE_MATRIX: Dict[str, List[Optional[float]]] = {
    "mini-van": [650, 700, 750, 800, 850, 900, 1000, 1100, 1200, 1300, 1400, 1500, 1600,
                 2000, 2300, 2600, 2900, 3400, 3900, 4400, 4900, 5500, 6200, 6900, None],
    "1-ton-truck": [800, 850, 900, 950, 1000, 1050, 1200, 1350, 1500, 1650, 1800, 1950, 2100,
                    2500, 2900, 3300, 3700, 4200, 4700, 5200, 5700, 6300, 7000, 7700, None],
    "1.5-ton-truck": [950, 1000, 1100, 1200, 1300, 1400, 1600, 1800, 2000, 2200, 2400, 2600, 2800,
                      3200, 3600, 4000, 4400, 5000, 5600, 6200, 6800, 7500, 8200, 9000, None],
    "2-ton-truck": [1050, 1100, 1200, 1350, 1400, 1500, 1800, 2050, 2250, 2450, 2650, 2850, 3050,
                    3500, 3900, 4300, 4700, 5300, 5900, 6500, 7200, 7900, 8700, 9600, None],
    "4-ton-truck": [1300, 1600, 1900, 2100, 2400, 2700, 3200, 3600, 4000, 4300, 4700, 5100, 5500,
                    6200, 6800, 7500, 8200, 9500, 10800, 12500, 14200, 16000, 18500, 21000, None],
    "5-ton-truck": [1500, 1800, 2100, 2300, 2600, 3000, 3500, 4000, 4400, 4700, 5100, 5600, 6000,
                    6800, 7500, 8200, 8900, 10200, 11600, 13400, 15200, 17100, 19800, 22500, None],
    "8-ton-truck": [2500, 3000, 3500, 4000, 4500, 5000, 5500, 6000, 6500, 7000, 7500, 8000, 8500,
                    9500, 10500, 11500, 12500, 14000, 15500, 18000, 20500, 23000, 26000, 29000, None],
    "10-ton-truck": [3000, 3600, 4200, 4800, 5400, 6000, 6600, 7200, 7800, 8400, 9000, 9600, 10200,
                     11400, 12600, 13800, 15000, 16800, 18600, 21600, 24600, 27600, 31200, 34800, None],
}

EXTRA_SERVICES: List[ExtraServiceOut] = [
    ExtraServiceOut(id="loading-service", code=ExtraServiceCode.LOADING.value, name="Loading / Unloading",
                    description="Professional loading and unloading service",
                    price_type=PricingModel.PER_UNIT, price=350, unit="person"),
    ExtraServiceOut(id="stairs", code=ExtraServiceCode.STAIRS.value, name="Stair Flights",
                    description="Additional charge per flight of stairs",
                    price_type=PricingModel.PER_UNIT, price=150, unit="flight"),
    ExtraServiceOut(id="packing", code=ExtraServiceCode.PACKING.value, name="Boxes & Bubble-Wrap",
                    description="10 boxes + bubble wrap package",
                    price_type=PricingModel.FLAT, price=200),
    ExtraServiceOut(id="cleaning", code=ExtraServiceCode.CLEANING.value, name="Cleaning Service",
                    description="Professional cleaning service",
                    price_type=PricingModel.FLAT, price=500),
    ExtraServiceOut(id="express", code=ExtraServiceCode.EXPRESS.value, name="Express Delivery",
                    description="Same-day delivery service",
                    price_type=PricingModel.FLAT, price=500),
    ExtraServiceOut(id="insurance", code=ExtraServiceCode.INSURANCE.value, name="Insurance",
                    description="Comprehensive item insurance",
                    price_type=PricingModel.PERCENTAGE, price=5),
    ExtraServiceOut(id="waiting-time", code=ExtraServiceCode.WAITING.value, name="Waiting Time",
                    description="Additional waiting time charge",
                    price_type=PricingModel.PER_UNIT, price=100, unit="15min"),
]


def generate_pricing_rates(
    fare_matrix: Dict[str, List[Optional[float]]] = FARE_MATRIX,
    vehicle_classes: Sequence[VehicleClassOut] = VEHICLE_CLASSES,
    distance_bands: Sequence[DistanceBandOut] = DISTANCE_BANDS,
) -> List[PricingRateOut]:
    """Expand the fare matrix into one rate row per (vehicle class, band)."""
    rates = []
    for vehicle in vehicle_classes:
        fares = fare_matrix.get(vehicle.id)
        if fares is None:
            raise ValueError(f"No fares defined for vehicle class '{vehicle.id}'")
        if len(fares) != len(distance_bands):
            raise ValueError(
                f"Vehicle class '{vehicle.id}' has {len(fares)} fares "
                f"for {len(distance_bands)} distance bands"
            )
        for band, fare in zip(distance_bands, fares):
            rates.append(PricingRateOut(
                id=f"rate-{band.id}-{vehicle.id}",
                vehicle_class_id=vehicle.id,
                distance_band_id=band.id,
                base_fare=CUSTOM_QUOTE_FARE if fare is None else float(fare),
            ))
    return rates
