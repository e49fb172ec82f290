"""Card endpoints - structural validation, test numbers and BIN table browsing"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from fintools_gateway.api.v1.schemas import (
    BankBinsResponse,
    BinBanksResponse,
    BinRecordSchema,
    BinStatisticsResponse,
    CardGenerateRequest,
    CardGenerateResponse,
    CardStructureSchema,
    CardValidateRequest,
    CardValidateResponse,
)
from fintools_gateway.api.dependencies import get_bin_table, get_request_id
from fintools_gateway.config import settings
from fintools_gateway.domain.bins import BinTable
from fintools_gateway.domain.cards import (
    classify_network,
    format_card_number,
    generate_test_card_number,
    validate_card,
)
from fintools_gateway.domain.exceptions import InvalidInputError
from fintools_gateway.infrastructure.observability.metrics import record_generation, record_validation
from fintools_gateway.infrastructure.observability.logging import log_validation

router = APIRouter()


@router.post("/cards/validate", response_model=CardValidateResponse)
def validate_card_endpoint(
    request_body: CardValidateRequest,
    request: Request,
    bin_table: BinTable = Depends(get_bin_table),
):
    """
    Validate a card number.

    Flow:
    1. Length 13-19
    2. Luhn checksum
    3. Network from the issuer range and its allowed lengths
    4. Issuer enrichment from the BIN table (longest prefix wins)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    info = validate_card(request_body.card_number, bin_table, settings.default_bin_length)

    duration_ms = (time.time() - start_time) * 1000
    record_validation("card", info.status)
    log_validation(request_id, "card", info.is_valid, duration_ms)

    return CardValidateResponse(
        status=info.status,
        is_valid=info.is_valid,
        network=info.network,
        length=info.length,
        luhn_valid=info.luhn_valid,
        formatted=format_card_number(request_body.card_number),
        structure=CardStructureSchema.model_validate(info.structure),
        errors=info.errors,
        bank=info.bank,
        country=info.country,
        card_category=info.card_category,
        card_tier=info.card_tier,
    )


@router.post("/cards/generate", response_model=CardGenerateResponse)
def generate_card_endpoint(request_body: CardGenerateRequest, request: Request):
    """Luhn-valid test number for a BIN; never a real card"""
    request_id = get_request_id(request)

    try:
        number = generate_test_card_number(request_body.bin, request_body.length)

    except InvalidInputError as e:
        logging.warning(f"Card generation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_generation("card")
    return CardGenerateResponse(
        card_number=number,
        formatted=format_card_number(number),
        network=classify_network(number),
    )


@router.get("/cards/banks", response_model=BinBanksResponse)
def list_bin_banks(bin_table: BinTable = Depends(get_bin_table)):
    return BinBanksResponse(banks=bin_table.banks())


@router.get("/cards/banks/{bank}/bins", response_model=BankBinsResponse)
def list_bank_bins(bank: str, bin_table: BinTable = Depends(get_bin_table)):
    """Active BIN ranges issued by one bank"""
    records = bin_table.bins_for_bank(bank)
    if not records:
        raise HTTPException(status_code=404, detail="Bank not found")
    return BankBinsResponse(bank=bank, bins=[BinRecordSchema.model_validate(r) for r in records])


@router.get("/cards/statistics", response_model=BinStatisticsResponse)
def bin_statistics(bin_table: BinTable = Depends(get_bin_table)):
    return BinStatisticsResponse(**bin_table.statistics())
