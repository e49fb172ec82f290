"""Payment card structural validator - Luhn, network classification, MII/BIN split, test numbers"""

import re
import secrets
from typing import Callable, Dict, List, Optional, Tuple

from fintools_gateway.domain.bins import BinTable
from fintools_gateway.domain.exceptions import (
    InvalidInputFormatError,
    InvalidInputLengthError,
    UnsupportedNetworkError,
)
from fintools_gateway.domain.models import CardInfo, CardStructure
from fintools_gateway.utils.digits import clean_digits

VISA = "Visa"
MASTERCARD = "Mastercard"
AMEX = "American Express"
DINERS = "Diners Club"
DISCOVER = "Discover"
JCB = "JCB"
MAESTRO = "Maestro"

MIN_CARD_LENGTH = 13
MAX_CARD_LENGTH = 19
DEFAULT_BIN_LENGTH = 6
MIN_BIN_LENGTH = 6
MAX_BIN_LENGTH = 8

# Major Industry Identifier - first digit of the card number
MII_CODES: Dict[str, str] = {
    "0": "ISO/TC 68 and other industry assignments",
    "1": "Airlines",
    "2": "Airlines, financial and other future industry assignments",
    "3": "Travel and entertainment",
    "4": "Banking and financial",
    "5": "Banking and financial",
    "6": "Merchandising and banking/financial",
    "7": "Petroleum and other future industry assignments",
    "8": "Healthcare, telecommunications and other future industry assignments",
    "9": "For assignment by national standards bodies",
}

NETWORK_LENGTHS: Dict[str, Tuple[int, ...]] = {
    VISA: (13, 16, 19),
    MASTERCARD: (16,),
    DISCOVER: (16,),
    JCB: (16,),
    AMEX: (15,),
    DINERS: (14, 16),
    MAESTRO: tuple(range(12, 20)),
}
UNKNOWN_NETWORK_LENGTHS: Tuple[int, ...] = tuple(range(MIN_CARD_LENGTH, MAX_CARD_LENGTH + 1))


def _mastercard_2_series(number: str) -> bool:
    return len(number) >= 4 and 2221 <= int(number[:4]) <= 2720


def _prefix(pattern: str) -> Callable[[str], bool]:
    regex = re.compile(pattern)
    return lambda number: regex.match(number) is not None


# First match wins
_NETWORK_RULES: List[Tuple[str, Callable[[str], bool]]] = [
    (VISA, _prefix(r"^4")),
    (MASTERCARD, _prefix(r"^5[1-5]")),
    (MASTERCARD, _mastercard_2_series),
    (AMEX, _prefix(r"^3[47]")),
    (DINERS, _prefix(r"^(30[0-5]|3[68])")),
    (DISCOVER, _prefix(r"^(6011|65|64[4-9])")),
    (JCB, _prefix(r"^35")),
    (MAESTRO, _prefix(r"^(5[6-9]|6)")),
]


def luhn_check(card_number: str) -> bool:
    """Right-to-left doubling of every second digit; valid iff the sum is divisible by 10"""
    number = clean_digits(card_number)
    if not number:
        return False

    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def classify_network(card_number: str) -> Optional[str]:
    """Card network from the leading digits, or None when no issuer range matches"""
    number = clean_digits(card_number)
    for network, matches in _NETWORK_RULES:
        if matches(number):
            return network
    return None


def allowed_lengths(network: Optional[str]) -> Tuple[int, ...]:
    """Valid card lengths for a network; None means the network could not be classified"""
    if network is None:
        return UNKNOWN_NETWORK_LENGTHS
    try:
        return NETWORK_LENGTHS[network]
    except KeyError:
        raise UnsupportedNetworkError(f"Unknown card network: {network}") from None


def is_valid_length_for_network(card_number: str, network: Optional[str]) -> bool:
    return len(clean_digits(card_number)) in allowed_lengths(network)


def parse_structure(card_number: str, bin_length: int = DEFAULT_BIN_LENGTH) -> CardStructure:
    """Split a card number into MII, BIN, account identifier and check digit"""
    number = clean_digits(card_number)
    if not number:
        return CardStructure(
            mii="", mii_description="", bin="", issuer_identification="", account_identifier="", check_digit=""
        )

    bin_ = number[:bin_length]
    account = number[bin_length:-1] if len(number) > bin_length else ""
    return CardStructure(
        mii=number[0],
        mii_description=MII_CODES[number[0]],
        bin=bin_,
        issuer_identification=bin_[1:],
        account_identifier=account,
        check_digit=number[-1],
    )


def generate_check_digit(prefix: str) -> int:
    """Luhn check digit for a prefix, found by trying 0..9"""
    number = clean_digits(prefix)
    for candidate in range(10):
        if luhn_check(f"{number}{candidate}"):
            return candidate
    # Unreachable: exactly one of ten consecutive sums is divisible by 10
    raise AssertionError(f"No Luhn check digit for {number}")


def generate_test_card_number(bin_: str, target_length: int = 16) -> str:
    """
    Random Luhn-valid card number starting with the given BIN.

    Raises:
        InvalidInputFormatError: BIN contains non-digits
        InvalidInputLengthError: BIN is not 6-8 digits, does not leave room for
            a check digit, or the target length is outside 13-19
    """
    if not bin_.isascii() or not bin_.isdigit():
        raise InvalidInputFormatError("BIN must contain digits only")
    if not MIN_BIN_LENGTH <= len(bin_) <= MAX_BIN_LENGTH:
        raise InvalidInputLengthError(f"BIN must be {MIN_BIN_LENGTH}-{MAX_BIN_LENGTH} digits")
    if len(bin_) > target_length - 1:
        raise InvalidInputLengthError(
            f"BIN length ({len(bin_)}) is too long for target card length ({target_length})"
        )
    if not MIN_CARD_LENGTH <= target_length <= MAX_CARD_LENGTH:
        raise InvalidInputLengthError(f"Target length must be between {MIN_CARD_LENGTH}-{MAX_CARD_LENGTH} digits")

    middle_length = target_length - len(bin_) - 1
    prefix = bin_ + "".join(str(secrets.randbelow(10)) for _ in range(middle_length))
    return prefix + str(generate_check_digit(prefix))


def validate_card(
    card_number: str,
    bin_table: Optional[BinTable] = None,
    default_bin_length: int = DEFAULT_BIN_LENGTH,
) -> CardInfo:
    """
    Full card validation.

    Runs length -> Luhn -> network -> per-network length -> BIN enrichment and
    collects every failure instead of stopping at the first one. Input shorter
    than the shortest card is incomplete and gets no Luhn verdict yet.
    """
    number = clean_digits(card_number)
    errors: List[str] = []

    if not number:
        return CardInfo(
            is_valid=False,
            network=None,
            length=0,
            luhn_valid=False,
            structure=parse_structure(""),
            errors=["Card number is required"],
            incomplete=True,
        )

    if not MIN_CARD_LENGTH <= len(number) <= MAX_CARD_LENGTH:
        errors.append(f"Card number must be between {MIN_CARD_LENGTH}-{MAX_CARD_LENGTH} digits")

    incomplete = len(number) < MIN_CARD_LENGTH
    luhn_valid = luhn_check(number)
    if not luhn_valid and not incomplete:
        errors.append("Invalid card number (Luhn check failed)")

    network = classify_network(number)
    if network is None and len(number) >= MIN_BIN_LENGTH:
        errors.append("Unknown card type")
    if network is not None and not is_valid_length_for_network(number, network):
        errors.append(f"Invalid length for {network} card")

    record = bin_table.lookup(number) if bin_table is not None else None
    bin_length = record.bin_length if record else default_bin_length

    return CardInfo(
        is_valid=not errors,
        network=record.card_network if record else network,
        length=len(number),
        luhn_valid=luhn_valid,
        structure=parse_structure(number, bin_length),
        errors=errors,
        bank=record.bank if record else None,
        country=record.country if record else None,
        card_category=record.card_category if record else None,
        card_tier=record.card_tier if record else None,
        incomplete=incomplete,
    )


def format_card_number(card_number: str) -> str:
    """Group digits in fours for display"""
    number = clean_digits(card_number)
    return " ".join(number[i : i + 4] for i in range(0, len(number), 4))


def clean_card_number(raw: str) -> str:
    """Digits only, capped at the longest card length"""
    return clean_digits(raw)[:MAX_CARD_LENGTH]
