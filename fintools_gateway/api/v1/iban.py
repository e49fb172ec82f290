"""IBAN endpoints - validation with step trace, generation, bank directory"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Request

from fintools_gateway.api.v1.schemas import (
    BankDirectoryResponse,
    BankSchema,
    IbanBreakdownSchema,
    IbanGenerateRequest,
    IbanGenerateResponse,
    IbanValidateRequest,
    IbanValidateResponse,
)
from fintools_gateway.api.dependencies import get_request_id
from fintools_gateway.domain.banks import CROATIAN_BANKS, find_bank, search_banks
from fintools_gateway.domain.exceptions import ChecksumMismatchError, InvalidInputError
from fintools_gateway.domain.iban import explain_iban, generate_iban, generate_iban_for_bank, parse_iban
from fintools_gateway.infrastructure.observability.metrics import record_generation, record_validation
from fintools_gateway.infrastructure.observability.logging import log_validation

router = APIRouter()


@router.post("/iban/validate", response_model=IbanValidateResponse)
def validate_iban_endpoint(request_body: IbanValidateRequest, request: Request):
    """
    Validate a Croatian IBAN.

    All three checksums (IBAN mod 97, bank code and account number mod 11)
    are reported together; a too-short value is reported as incomplete.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    result = explain_iban(request_body.iban)
    response = IbanValidateResponse.model_validate(result)

    try:
        breakdown = parse_iban(request_body.iban)
    except InvalidInputError:
        breakdown = None
    if breakdown is not None:
        response.breakdown = IbanBreakdownSchema.model_validate(breakdown)
        bank = find_bank(breakdown.bank_code)
        response.bank_name = bank.name if bank else None

    duration_ms = (time.time() - start_time) * 1000
    record_validation("iban", result.status)
    log_validation(request_id, "iban", result.is_valid, duration_ms)
    return response


@router.post("/iban/generate", response_model=IbanGenerateResponse)
def generate_iban_endpoint(request_body: IbanGenerateRequest, request: Request):
    """Build an IBAN from a bank (code or directory name) and an account number"""
    request_id = get_request_id(request)
    bank_query = request_body.bank.strip()

    try:
        if bank_query.isdigit():
            iban = generate_iban(bank_query, request_body.account_number)
        else:
            iban = generate_iban_for_bank(bank_query, request_body.account_number)

    except (InvalidInputError, ChecksumMismatchError) as e:
        logging.warning(f"IBAN generation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    breakdown = parse_iban(iban)
    bank = find_bank(breakdown.bank_code)
    record_generation("iban")
    return IbanGenerateResponse(
        iban=iban,
        check_digits=breakdown.check_digits,
        bank_code=breakdown.bank_code,
        account_number=breakdown.account_number,
        bank_name=bank.name if bank else None,
    )


@router.get("/iban/banks", response_model=BankDirectoryResponse)
def list_banks(q: Optional[str] = None):
    """Croatian bank directory, optionally filtered by name or code"""
    banks = search_banks(q) if q else CROATIAN_BANKS
    return BankDirectoryResponse(banks=[BankSchema.model_validate(bank) for bank in banks])
