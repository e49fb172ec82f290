"""Payment slip endpoints - HUB3 barcode text layout and parsing"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from fintools_gateway.api.v1.schemas import (
    PaymentParseRequest,
    PaymentParseResponse,
    PaymentPayloadResponse,
    PaymentSlipSchema,
)
from fintools_gateway.api.dependencies import get_request_id
from fintools_gateway.config import settings
from fintools_gateway.domain.exceptions import InvalidInputError
from fintools_gateway.domain.models import PaymentSlip
from fintools_gateway.domain.payment_slip import (
    format_amount,
    format_payload,
    parse_amount,
    parse_payload,
    validate_slip,
)
from fintools_gateway.infrastructure.observability.metrics import record_generation, record_validation
from fintools_gateway.infrastructure.observability.logging import log_validation

router = APIRouter()


@router.post("/payment-slip/payload", response_model=PaymentPayloadResponse)
def build_payload(request_body: PaymentSlipSchema, request: Request):
    """
    Validate a payment order and lay it out as HUB3 text.

    Returns 422 with every violated form rule when the order is invalid.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        amount_cents = parse_amount(request_body.amount)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=[str(e)])

    slip = PaymentSlip(
        receiver_name=request_body.receiver_name.strip(),
        iban=request_body.iban.strip(),
        amount_cents=amount_cents,
        currency=settings.hub3_currency,
        sender_name=request_body.sender_name.strip(),
        sender_street=request_body.sender_street.strip(),
        sender_postcode=request_body.sender_postcode.strip(),
        sender_city=request_body.sender_city.strip(),
        receiver_street=request_body.receiver_street.strip(),
        receiver_postcode=request_body.receiver_postcode.strip(),
        receiver_city=request_body.receiver_city.strip(),
        model=request_body.model.strip(),
        reference=request_body.reference.strip(),
        purpose=request_body.purpose.strip().upper() or settings.hub3_default_purpose,
        description=request_body.description.strip(),
    )
    result = validate_slip(slip)

    duration_ms = (time.time() - start_time) * 1000
    record_validation("payment_slip", result.status)
    log_validation(request_id, "payment_slip", result.is_valid, duration_ms)

    if not result.is_valid:
        logging.warning(
            f"Payment slip rejected: {len(result.errors)} rule violations", extra={"request_id": request_id}
        )
        raise HTTPException(status_code=422, detail=result.errors)

    payload = format_payload(slip)
    record_generation("payment_slip")
    return PaymentPayloadResponse(payload=payload, lines=payload.split("\n"))


@router.post("/payment-slip/parse", response_model=PaymentParseResponse)
def parse_payload_endpoint(request_body: PaymentParseRequest, request: Request):
    """Read a decoded HUB3 barcode text back into a payment order"""
    request_id = get_request_id(request)

    try:
        slip = parse_payload(request_body.payload)

    except InvalidInputError as e:
        logging.warning(f"HUB3 payload rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    result = validate_slip(slip)
    record_validation("payment_slip", result.status)

    return PaymentParseResponse(
        sender_name=slip.sender_name,
        sender_street=slip.sender_street,
        sender_postcode=slip.sender_postcode,
        sender_city=slip.sender_city,
        receiver_name=slip.receiver_name,
        receiver_street=slip.receiver_street,
        receiver_postcode=slip.receiver_postcode,
        receiver_city=slip.receiver_city,
        iban=slip.iban,
        amount=format_amount(slip.amount_cents),
        model=slip.model,
        reference=slip.reference,
        purpose=slip.purpose,
        description=slip.description,
        currency=slip.currency,
        amount_cents=slip.amount_cents,
        is_valid=result.is_valid,
        errors=result.errors,
    )
