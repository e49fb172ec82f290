"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from fintools_gateway.domain.models import MnemonicState, StepKind


class ChecksumStepSchema(BaseModel):
    """One stage of a checksum trace"""

    model_config = ConfigDict(from_attributes=True)

    stage_label: str
    inputs: str = ""
    computation: str = ""
    output: str = ""
    outcome_kind: StepKind = StepKind.INFORMATIONAL


class ValidationResponse(BaseModel):
    """Verdict, accumulated errors and step trace of a checksum validator"""

    model_config = ConfigDict(from_attributes=True)

    status: str  # valid | invalid | incomplete
    is_valid: bool
    error_kind: Optional[str] = None
    errors: List[str] = []
    steps: List[ChecksumStepSchema] = []


# IBAN


class IbanValidateRequest(BaseModel):
    """Request body for POST /v1/iban/validate"""

    iban: str = Field(..., max_length=64, description="IBAN, spaces allowed")


class IbanBreakdownSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    country_code: str
    check_digits: str
    bank_code: str
    account_number: str


class IbanValidateResponse(ValidationResponse):
    """Response for POST /v1/iban/validate"""

    breakdown: Optional[IbanBreakdownSchema] = None
    bank_name: Optional[str] = None


class IbanGenerateRequest(BaseModel):
    """Request body for POST /v1/iban/generate"""

    bank: str = Field(..., min_length=1, description="7-digit bank code or bank name")
    account_number: str = Field(..., min_length=1, max_length=32, description="10-digit account number")


class IbanGenerateResponse(BaseModel):
    """Response for POST /v1/iban/generate"""

    iban: str
    check_digits: str
    bank_code: str
    account_number: str
    bank_name: Optional[str] = None


class BankSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str


class BankDirectoryResponse(BaseModel):
    """Response for GET /v1/iban/banks"""

    banks: List[BankSchema]


# OIB


class OibValidateRequest(BaseModel):
    """Request body for POST /v1/oib/validate"""

    oib: str = Field(..., max_length=32)


class OibGenerateRequest(BaseModel):
    """Request body for POST /v1/oib/generate; a random base is used when omitted"""

    base: Optional[str] = Field(None, description="10 base digits")


class OibGenerateResponse(BaseModel):
    oib: str


# Cards


class CardValidateRequest(BaseModel):
    """Request body for POST /v1/cards/validate"""

    card_number: str = Field(..., max_length=64, description="Card number, spaces and dashes allowed")


class CardStructureSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    mii: str
    mii_description: str
    bin: str
    issuer_identification: str
    account_identifier: str
    check_digit: str


class CardValidateResponse(BaseModel):
    """Response for POST /v1/cards/validate"""

    status: str  # valid | invalid | incomplete
    is_valid: bool
    network: Optional[str] = None
    length: int
    luhn_valid: bool
    formatted: str
    structure: CardStructureSchema
    errors: List[str] = []
    bank: Optional[str] = None
    country: Optional[str] = None
    card_category: Optional[str] = None
    card_tier: Optional[str] = None


class CardGenerateRequest(BaseModel):
    """Request body for POST /v1/cards/generate"""

    bin: str = Field(..., min_length=1, description="6-8 digit issuer identification number")
    length: int = Field(16, description="Target card length, 13-19")


class CardGenerateResponse(BaseModel):
    """Response for POST /v1/cards/generate"""

    card_number: str
    formatted: str
    network: Optional[str] = None


class BinRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bin: str
    bin_length: int
    bank: str
    bank_code: Optional[str] = None
    country: str
    currency: str
    card_network: str
    card_category: str
    card_tier: Optional[str] = None
    valid_lengths: List[int]


class BinBanksResponse(BaseModel):
    """Response for GET /v1/cards/banks"""

    banks: List[str]


class BankBinsResponse(BaseModel):
    """Response for GET /v1/cards/banks/{bank}/bins"""

    bank: str
    bins: List[BinRecordSchema]


class BinStatisticsResponse(BaseModel):
    """Response for GET /v1/cards/statistics"""

    total_banks: int
    total_bins: int
    card_networks: Dict[str, int]
    card_categories: Dict[str, int]


# Mnemonic


class MnemonicValidateRequest(BaseModel):
    """Request body for POST /v1/mnemonic/validate"""

    phrase: str = Field(..., max_length=1024, description="12-word recovery phrase")
    reveal: bool = Field(False, description="Return the entropy unmasked")


class MnemonicValidateResponse(BaseModel):
    """Response for POST /v1/mnemonic/validate"""

    state: MnemonicState
    is_valid: bool
    word_count: int
    invalid_words: List[str] = []
    entropy_hex: Optional[str] = None
    steps: List[ChecksumStepSchema] = []


class MnemonicDeriveRequest(BaseModel):
    """Request body for POST /v1/mnemonic/derive"""

    phrase: str = Field(..., max_length=1024, description="12-word recovery phrase")
    passphrase: str = Field("", max_length=256, description="Optional BIP-39 passphrase")
    chains: Optional[List[str]] = Field(None, description="Chains to derive; all six when omitted")
    reveal: bool = Field(False, description="Return entropy, seed and private keys unmasked")


class DerivedKeySchema(BaseModel):
    chain: str
    derivation_path: str
    private_key: str
    public_key: str
    address: str


class MnemonicDeriveResponse(BaseModel):
    """Response for POST /v1/mnemonic/derive"""

    state: MnemonicState
    is_valid: bool
    invalid_words: List[str] = []
    secrets_masked: bool
    entropy_hex: Optional[str] = None
    seed_hex: Optional[str] = None
    keys: List[DerivedKeySchema] = []


# Payment slip


class PaymentSlipSchema(BaseModel):
    """HUB3 payment order form; the amount uses the Croatian format '1.234,56'"""

    sender_name: str = ""
    sender_street: str = ""
    sender_postcode: str = ""
    sender_city: str = ""
    receiver_name: str = Field(..., description="Required, max 25 characters")
    receiver_street: str = ""
    receiver_postcode: str = ""
    receiver_city: str = ""
    iban: str
    amount: str = "0,00"
    model: str = "00"
    reference: str = ""
    purpose: str = "OTHR"
    description: str = ""


class PaymentPayloadResponse(BaseModel):
    """Response for POST /v1/payment-slip/payload"""

    payload: str
    lines: List[str]


class PaymentParseRequest(BaseModel):
    """Request body for POST /v1/payment-slip/parse"""

    payload: str = Field(..., max_length=4096)


class PaymentParseResponse(PaymentSlipSchema):
    """Response for POST /v1/payment-slip/parse"""

    currency: str
    amount_cents: int
    is_valid: bool
    errors: List[str] = []
