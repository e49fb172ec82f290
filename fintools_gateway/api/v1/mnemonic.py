"""Mnemonic endpoints - recovery phrase validation and multichain key derivation"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from fintools_gateway.api.v1.schemas import (
    ChecksumStepSchema,
    DerivedKeySchema,
    MnemonicDeriveRequest,
    MnemonicDeriveResponse,
    MnemonicValidateRequest,
    MnemonicValidateResponse,
)
from fintools_gateway.api.dependencies import get_crypto_backend, get_request_id
from fintools_gateway.config import settings
from fintools_gateway.domain.derivation import derive_keys
from fintools_gateway.domain.exceptions import PrimitiveUnavailableError, UnsupportedChainError
from fintools_gateway.domain.mnemonic import validate_mnemonic
from fintools_gateway.infrastructure.crypto.backend import CryptoBackend
from fintools_gateway.infrastructure.observability.metrics import record_derivation, record_validation
from fintools_gateway.infrastructure.observability.logging import log_derivation, log_validation
from fintools_gateway.utils.masking import mask_secret

router = APIRouter()


def _shown(value: Optional[str], masked: bool) -> Optional[str]:
    if value is None or not masked:
        return value
    return mask_secret(value)


@router.post("/mnemonic/validate", response_model=MnemonicValidateResponse)
def validate_mnemonic_endpoint(
    request_body: MnemonicValidateRequest,
    request: Request,
    backend: CryptoBackend = Depends(get_crypto_backend),
):
    """Word count, wordlist membership and checksum of a 12-word phrase"""
    start_time = time.time()
    request_id = get_request_id(request)
    masked = settings.mask_secrets and not request_body.reveal

    result = validate_mnemonic(request_body.phrase, backend.wordlist)

    duration_ms = (time.time() - start_time) * 1000
    record_validation("mnemonic", "valid" if result.is_valid else "invalid")
    log_validation(request_id, "mnemonic", result.is_valid, duration_ms)

    return MnemonicValidateResponse(
        state=result.state,
        is_valid=result.is_valid,
        word_count=len(result.words),
        invalid_words=result.invalid_words,
        entropy_hex=_shown(result.entropy_hex, masked),
        steps=[ChecksumStepSchema.model_validate(step) for step in result.steps],
    )


@router.post("/mnemonic/derive", response_model=MnemonicDeriveResponse)
def derive_endpoint(
    request_body: MnemonicDeriveRequest,
    request: Request,
    backend: CryptoBackend = Depends(get_crypto_backend),
):
    """
    Derive key pairs and addresses from a recovery phrase.

    Flow:
    1. Validate the phrase (an invalid phrase yields no key material)
    2. PBKDF2 seed from phrase and optional passphrase
    3. BIP-32 / SLIP-0010 derivation per requested chain
    4. Mask entropy, seed and private keys unless reveal is requested
    """
    start_time = time.time()
    request_id = get_request_id(request)
    masked = settings.mask_secrets and not request_body.reveal

    try:
        validation, derived = derive_keys(
            request_body.phrase,
            backend,
            passphrase=request_body.passphrase,
            chains=request_body.chains,
        )

    except UnsupportedChainError as e:
        logging.warning(f"Derivation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except PrimitiveUnavailableError as e:
        record_derivation("unavailable")
        logging.error(f"Derivation unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Derivation unavailable")

    except Exception as e:
        # Exception text may echo key material, so only the type is logged
        logging.error(f"Unexpected derivation error: {type(e).__name__}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_derivation("derived" if derived else "rejected")
    log_derivation(request_id, len(derived.keys) if derived else 0, validation.state.value, duration_ms)

    if derived is None:
        return MnemonicDeriveResponse(
            state=validation.state,
            is_valid=False,
            invalid_words=validation.invalid_words,
            secrets_masked=masked,
        )

    return MnemonicDeriveResponse(
        state=validation.state,
        is_valid=True,
        secrets_masked=masked,
        entropy_hex=_shown(derived.entropy_hex, masked),
        seed_hex=_shown(derived.seed_hex, masked),
        keys=[
            DerivedKeySchema(
                chain=key.chain,
                derivation_path=key.derivation_path,
                private_key=_shown(key.private_key, masked),
                public_key=key.public_key,
                address=key.address,
            )
            for key in derived.keys
        ],
    )
