"""OIB endpoints - validation with step trace and generation"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from fintools_gateway.api.v1.schemas import (
    OibGenerateRequest,
    OibGenerateResponse,
    OibValidateRequest,
    ValidationResponse,
)
from fintools_gateway.api.dependencies import get_request_id
from fintools_gateway.domain.exceptions import InvalidInputError
from fintools_gateway.domain.oib import explain_oib, generate_oib
from fintools_gateway.infrastructure.observability.metrics import record_generation, record_validation
from fintools_gateway.infrastructure.observability.logging import log_validation

router = APIRouter()


@router.post("/oib/validate", response_model=ValidationResponse)
def validate_oib_endpoint(request_body: OibValidateRequest, request: Request):
    start_time = time.time()
    request_id = get_request_id(request)

    result = explain_oib(request_body.oib)

    duration_ms = (time.time() - start_time) * 1000
    record_validation("oib", result.status)
    log_validation(request_id, "oib", result.is_valid, duration_ms)
    return ValidationResponse.model_validate(result)


@router.post("/oib/generate", response_model=OibGenerateResponse)
def generate_oib_endpoint(request_body: OibGenerateRequest, request: Request):
    """Complete a 10-digit base with its control digit, or generate a random OIB"""
    request_id = get_request_id(request)

    try:
        oib = generate_oib(request_body.base)

    except InvalidInputError as e:
        logging.warning(f"OIB generation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_generation("oib")
    return OibGenerateResponse(oib=oib)
