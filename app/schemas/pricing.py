from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union

from app.core.enums import PricingModel, CustomQuoteReason


class VehicleClassOut(BaseModel):
    id: str
    name: str
    capacity: str
    max_weight: float = Field(..., alias="maxWeight")
    description: Optional[str] = None
    order: int

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True


class DistanceBandOut(BaseModel):
    id: str
    min_km: float = Field(..., alias="minKm")
    max_km: Optional[float] = Field(None, alias="maxKm")
    label: str

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True


class PricingRateOut(BaseModel):
    id: str
    vehicle_class_id: str = Field(..., alias="vehicleClassId")
    distance_band_id: str = Field(..., alias="distanceBandId")
    base_fare: float = Field(..., ge=0, alias="baseFare")

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True


class ExtraServiceOut(BaseModel):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    price_type: PricingModel = Field(..., alias="priceType")
    price: float = Field(..., ge=0)
    unit: Optional[str] = None

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True


class Coordinates(BaseModel):
    latitude: float = Field(..., allow_inf_nan=False)
    longitude: float = Field(..., allow_inf_nan=False)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = Field(None, alias="postalCode")
    country: Optional[str] = None

    class Config:
        populate_by_name = True


class ExtraServiceSelection(BaseModel):
    loading: bool = False
    loading_people: Optional[int] = Field(None, ge=0, alias="loadingPeople")
    stairs: int = Field(0, ge=0)
    packing: bool = False
    cleaning: bool = False
    express: bool = False
    insurance: bool = False
    insurance_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="insuranceValue")
    # 15-minute blocks
    waiting_time: Optional[int] = Field(None, ge=0, alias="waitingTime")

    class Config:
        populate_by_name = True


class PriceEstimateRequest(BaseModel):
    distance: Optional[float] = Field(None, allow_inf_nan=False)
    vehicle_class_id: str = Field(..., alias="vehicleClassId")
    extra_services: ExtraServiceSelection = Field(
        default_factory=ExtraServiceSelection, alias="extraServices"
    )
    pickup_location: Optional[Coordinates] = Field(None, alias="pickupLocation")
    dropoff_location: Optional[Coordinates] = Field(None, alias="dropoffLocation")

    class Config:
        populate_by_name = True


class ExtrasCost(BaseModel):
    loading: float = 0.0
    stairs: float = 0.0
    packing: float = 0.0
    cleaning: float = 0.0
    express: float = 0.0
    insurance: float = 0.0
    waiting_time: float = Field(0.0, alias="waitingTime")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class PriceBreakdown(BaseModel):
    base_fare: float = Field(..., alias="baseFare")
    extras: ExtrasCost
    total: float

    class Config:
        populate_by_name = True
        frozen = True


class PriceEstimate(BaseModel):
    distance: float
    distance_band: DistanceBandOut = Field(..., alias="distanceBand")
    price_breakdown: PriceBreakdown = Field(..., alias="priceBreakdown")

    class Config:
        populate_by_name = True
        frozen = True


class PricingErrorOut(BaseModel):
    error: str


class CustomQuoteOut(BaseModel):
    error: str
    requires_custom_quote: bool = Field(True, alias="requiresCustomQuote")
    reason: CustomQuoteReason
    distance: float

    class Config:
        populate_by_name = True


PriceTableRow = Dict[str, Union[str, float]]
PriceTable = List[PriceTableRow]
