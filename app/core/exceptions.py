"""Pricing engine error taxonomy"""
from typing import Optional

from app.core.enums import CustomQuoteReason


class PricingError(Exception):
    """Base class for errors raised while estimating a price.

    ``status_code`` is the HTTP status the API layer answers with.
    """
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingDistanceInput(PricingError):
    status_code = 400

    def __init__(self, message: str = "Distance is required either directly or via pickup/dropoff locations"):
        super().__init__(message)


class NoDistanceBandFound(PricingError):
    status_code = 422

    def __init__(self, distance: float):
        super().__init__(f"No distance band found for distance {distance} km")
        self.distance = distance


class NoRateFound(PricingError):
    status_code = 404

    def __init__(self, vehicle_class_id: str, distance_band_id: str):
        super().__init__(
            f"No pricing rate found for vehicle class '{vehicle_class_id}' "
            f"and distance band '{distance_band_id}'"
        )
        self.vehicle_class_id = vehicle_class_id
        self.distance_band_id = distance_band_id


class ExtraServiceNotConfigured(PricingError):
    status_code = 500

    def __init__(self, code: str, reason: str = "no definition"):
        super().__init__(f"Extra service '{code}' is not configured: {reason}")
        self.code = code


class RequiresCustomQuote(Exception):
    """The trip cannot be priced from the rate table and needs a manual quote.

    Not a PricingError: it is an expected business outcome, not a failure.
    """

    def __init__(
        self,
        reason: CustomQuoteReason,
        distance: float,
        message: Optional[str] = None,
    ):
        if message is None:
            if reason == CustomQuoteReason.DISTANCE_EXCEEDS_TABLE:
                message = "Distance exceeds the rate table, please request a custom quote"
            else:
                message = "No fare is defined for this trip, please request a custom quote"
        super().__init__(message)
        self.reason = reason
        self.distance = distance
        self.message = message
