"""HUB3 payment slip: form rules, barcode text layout and its parser"""

import re
import unicodedata
from typing import List, Optional, Tuple

from fintools_gateway.config import settings
from fintools_gateway.domain.exceptions import (
    ChecksumMismatchError,
    InvalidInputFormatError,
    InvalidInputLengthError,
)
from fintools_gateway.domain.iban import validate_iban
from fintools_gateway.domain.models import PaymentSlip, ValidationResult

HUB3_LINE_COUNT = 14
AMOUNT_WIDTH = 15
MAX_AMOUNT_CENTS = 99_999_999  # 999.999,99

# ISO 20022 purpose codes offered on Croatian payment orders
PURPOSE_CODES = frozenset(
    {
        "OTHR", "SALA", "PENS", "BENE", "SSBE", "GOVT", "TAXS", "VATX", "RENT", "LOAN",
        "INSU", "ELEC", "WTER", "GASB", "PHON", "CBTV", "NWCH", "GDSV", "SCVE", "SUPP",
        "CHAR", "CASH", "DEPT", "FEES", "ALMY", "EDUC", "MDCS", "HLTI", "TRAD", "COMC",
    }
)

# (field, label, max length) for the free-text fields of the form
FIELD_LIMITS: Tuple[Tuple[str, str, int], ...] = (
    ("sender_name", "Sender name", 30),
    ("sender_street", "Sender street", 27),
    ("sender_city", "Sender city", 21),
    ("receiver_name", "Receiver name", 25),
    ("receiver_street", "Receiver street", 25),
    ("receiver_city", "Receiver city", 21),
    ("description", "Description", 35),
)

REFERENCE_MAX_LENGTH = 22
REFERENCE_MAX_SEGMENTS = 3
SEGMENT_MAX_LENGTH = 12
# model -> {segment index: max length}
SEGMENT_MAX_OVERRIDES = {
    "12": {0: 13},
    "41": {0: 13},
    "24": {1: 13},
}
# model -> {segment index: exact length}
SEGMENT_EXACT_LENGTHS = {
    "69": {1: 11},  # P2 is an OIB
    "83": {1: 16},
}

_AMOUNT = re.compile(r"^\d{1,3}(\.\d{3})*,\d{2}$|^\d{1,6},\d{2}$", re.ASCII)
_POSTCODE = re.compile(r"^\d{5}$", re.ASCII)
_MODEL = re.compile(r"^\d{2}$", re.ASCII)
_REFERENCE_CHARS = re.compile(r"^[0-9-]+$", re.ASCII)
_IBAN = re.compile(r"^HR\d{19}$", re.ASCII)


def _nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text or "")


def parse_amount(amount: str) -> int:
    """
    Croatian-formatted amount to cents: '1.234,56' -> 123456.

    An empty string counts as '0,00'. Raises InvalidInputFormatError for
    anything else that is not 'digits,dd' with optional thousands dots.
    """
    value = (amount or "").strip()
    if not value or value == "0,00":
        return 0
    if not _AMOUNT.match(value):
        raise InvalidInputFormatError("Amount must be in the format 0,00")
    return int(value.replace(".", "").replace(",", ""))


def format_amount(cents: int) -> str:
    """Cents to Croatian display format: 123456 -> '1.234,56'"""
    euros, rest = divmod(cents, 100)
    return f"{euros:,}".replace(",", ".") + f",{rest:02d}"


def validate_reference(reference: str, model: str) -> List[str]:
    """
    Reference number (poziv na broj) rules for a given model.

    Digits and hyphens only, at most three P1-P2-P3 segments, no empty
    segment, 12 digits per segment unless the model says otherwise.
    """
    value = (reference or "").strip()
    if not value:
        return []
    if len(value) > REFERENCE_MAX_LENGTH:
        return [f"Reference must be {REFERENCE_MAX_LENGTH} characters or less"]
    if not _REFERENCE_CHARS.match(value):
        return ["Reference may only contain digits and hyphens"]
    if value.startswith("-"):
        return ["Reference cannot start with a hyphen"]
    if value.endswith("-"):
        return ["Reference cannot end with a hyphen"]
    if "--" in value:
        return ["Reference cannot contain two consecutive hyphens"]

    segments = value.split("-")
    if len(segments) > REFERENCE_MAX_SEGMENTS:
        return ["At most two hyphens are allowed (format P1-P2-P3)"]

    exact = SEGMENT_EXACT_LENGTHS.get(model, {})
    overrides = SEGMENT_MAX_OVERRIDES.get(model, {})
    for index, segment in enumerate(segments):
        name = f"P{index + 1}"
        if index in exact:
            if len(segment) != exact[index]:
                return [f"For model HR{model}, {name} must have exactly {exact[index]} digits"]
            continue
        max_length = overrides.get(index, SEGMENT_MAX_LENGTH)
        if len(segment) > max_length:
            return [f"Segment {name} (model HR{model}) may have at most {max_length} digits"]
    return []


def validate_slip(slip: PaymentSlip) -> ValidationResult:
    """Check every form rule and collect all violations"""
    errors: List[str] = []
    kinds: List[str] = []

    def fail(message: str, kind: str = InvalidInputFormatError.error_kind) -> None:
        errors.append(message)
        kinds.append(kind)

    if not (slip.receiver_name or "").strip():
        fail("Receiver name is required")
    for attr, label, limit in FIELD_LIMITS:
        if len((getattr(slip, attr) or "").strip()) > limit:
            fail(f"{label} must be {limit} characters or less", InvalidInputLengthError.error_kind)

    for attr, label in (("sender_postcode", "Sender postcode"), ("receiver_postcode", "Receiver postcode")):
        postcode = getattr(slip, attr)
        if postcode and not _POSTCODE.match(postcode):
            fail(f"{label} must have 5 digits")

    if not _IBAN.match(slip.iban or ""):
        fail("IBAN must be HR followed by 19 digits")
    elif not validate_iban(slip.iban):
        fail("Invalid IBAN", ChecksumMismatchError.error_kind)

    if slip.amount_cents != 0 and not 1 <= slip.amount_cents <= MAX_AMOUNT_CENTS:
        fail("Amount must be between 0,01 and 999.999,99")

    if not _MODEL.match(slip.model or ""):
        fail("Model must have 2 digits (e.g. '00', '01')")
    else:
        for message in validate_reference(slip.reference, slip.model):
            fail(message)

    if slip.purpose not in PURPOSE_CODES:
        fail(f"Unknown purpose code: {slip.purpose}")

    return ValidationResult(is_valid=not errors, error_kind=kinds[0] if kinds else None, errors=errors)


def format_payload(slip: PaymentSlip, header: Optional[str] = None) -> str:
    """Lay the slip out as the 14-line HUB3 text encoded into the PDF417 barcode"""
    header = header or settings.hub3_header
    lines = [
        header,
        slip.currency,
        str(slip.amount_cents).zfill(AMOUNT_WIDTH),
        _nfc(slip.sender_name),
        _nfc(slip.sender_street),
        _nfc(f"{slip.sender_postcode} {slip.sender_city}").strip(),
        _nfc(slip.receiver_name),
        _nfc(slip.receiver_street),
        _nfc(f"{slip.receiver_postcode} {slip.receiver_city}").strip(),
        slip.iban,
        f"HR{slip.model or '00'}",
        slip.reference,
        slip.purpose or settings.hub3_default_purpose,
        _nfc(slip.description),
    ]
    return "\n".join(lines)


def _split_place(line: str) -> Tuple[str, str]:
    postcode, _, city = line.partition(" ")
    return postcode, city


def parse_payload(text: str, header: Optional[str] = None) -> PaymentSlip:
    """
    Reverse of format_payload.

    Raises:
        InvalidInputLengthError: fewer than 14 lines
        InvalidInputFormatError: wrong header or amount not 15 digits
    """
    header = header or settings.hub3_header
    lines = [line.strip() for line in _nfc(text).split("\n")]
    if len(lines) < HUB3_LINE_COUNT:
        raise InvalidInputLengthError(f"HUB3 payload must have {HUB3_LINE_COUNT} lines, got {len(lines)}")
    if lines[0] != header:
        raise InvalidInputFormatError(f"Invalid HUB3 header. Expected {header}, got: {lines[0]}")
    if not (len(lines[2]) == AMOUNT_WIDTH and lines[2].isascii() and lines[2].isdigit()):
        raise InvalidInputFormatError("Invalid amount format in payload")

    sender_postcode, sender_city = _split_place(lines[5])
    receiver_postcode, receiver_city = _split_place(lines[8])
    purpose = lines[12].upper()

    return PaymentSlip(
        currency=lines[1],
        amount_cents=int(lines[2]),
        sender_name=lines[3],
        sender_street=lines[4],
        sender_postcode=sender_postcode,
        sender_city=sender_city,
        receiver_name=lines[6],
        receiver_street=lines[7],
        receiver_postcode=receiver_postcode,
        receiver_city=receiver_city,
        iban=lines[9],
        model=lines[10].replace("HR", "", 1) or "00",
        reference=lines[11],
        purpose=purpose if purpose in PURPOSE_CODES else settings.hub3_default_purpose,
        description=lines[13],
    )
