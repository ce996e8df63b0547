from enum import Enum


class PricingSource(str, Enum):
    MEMORY = "memory"
    DATABASE = "database"

    def __str__(self):
        return self.value


class PricingModel(str, Enum):
    FLAT = "flat"
    PER_UNIT = "per_unit"
    PERCENTAGE = "percentage"

    def __str__(self):
        return self.value


class ExtraServiceCode(str, Enum):
    LOADING = "LOADING"
    STAIRS = "STAIRS"
    PACKING = "PACKING"
    CLEANING = "CLEANING"
    EXPRESS = "EXPRESS"
    INSURANCE = "INSURANCE"
    WAITING = "WAITING"

    def __str__(self):
        return self.value


class CustomQuoteReason(str, Enum):
    DISTANCE_EXCEEDS_TABLE = "distance_exceeds_table"
    NO_FARE_DEFINED = "no_fare_defined"

    def __str__(self):
        return self.value


class EstimateOutcome(str, Enum):
    PRICED = "priced"
    CUSTOM_QUOTE = "custom_quote"
    ERROR = "error"

    def __str__(self):
        return self.value
