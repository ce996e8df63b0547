from sqlalchemy import Column, String, Float, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
from app.core.enums import PricingModel


class VehicleClass(BaseModel):
    __tablename__ = "vehicle_classes"

    name = Column(String(80), nullable=False)
    capacity = Column(String(40), nullable=False)
    max_weight = Column(Float, nullable=False)
    description = Column(String(255), nullable=True)
    order = Column(Integer, nullable=False, default=0)


class DistanceBand(BaseModel):
    __tablename__ = "distance_bands"

    min_km = Column(Float, nullable=False, index=True)
    # NULL for the open-ended band
    max_km = Column(Float, nullable=True)
    label = Column(String(40), nullable=False)


class PricingRate(BaseModel):
    __tablename__ = "pricing_rates"
    __table_args__ = (
        UniqueConstraint("vehicle_class_id", "distance_band_id", name="uq_rate_vehicle_band"),
    )

    vehicle_class_id = Column(ForeignKey("vehicle_classes.id"), nullable=False)
    distance_band_id = Column(ForeignKey("distance_bands.id"), nullable=False)

    vehicle_class = relationship("VehicleClass", backref="rates")
    distance_band = relationship("DistanceBand", backref="rates")

    # 0 means no fare is defined and the trip needs a custom quote
    base_fare = Column(Float, nullable=False)


class ExtraService(BaseModel):
    __tablename__ = "extra_services"

    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(80), nullable=False)
    description = Column(String(255), nullable=True)
    price_type = Column(Enum(PricingModel), nullable=False)
    price = Column(Float, nullable=False)
    unit = Column(String(20), nullable=True)
