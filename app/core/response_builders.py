import math

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import PricingError, RequiresCustomQuote
from app.schemas.pricing import PricingErrorOut, CustomQuoteOut


def build_pricing_error_response(exc: PricingError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=PricingErrorOut(error=exc.message).model_dump(),
    )


def build_custom_quote_response(exc: RequiresCustomQuote) -> JSONResponse:
    body = CustomQuoteOut(
        error=exc.message,
        requires_custom_quote=True,
        reason=exc.reason,
        distance=exc.distance,
    )
    return JSONResponse(status_code=400, content=body.model_dump(mode="json", by_alias=True))


def _finite_json(value):
    # JSONResponse refuses NaN and Infinity; echo them back as strings
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _finite_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite_json(item) for item in value]
    return value


def build_validation_error_response(exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": _finite_json(jsonable_encoder(exc.errors()))},
    )
