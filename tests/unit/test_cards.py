"""Unit tests for the card structural validator"""

import pytest
from fintools_gateway.domain.cards import (
    AMEX,
    DINERS,
    DISCOVER,
    JCB,
    MAESTRO,
    MASTERCARD,
    VISA,
    allowed_lengths,
    classify_network,
    clean_card_number,
    format_card_number,
    generate_check_digit,
    generate_test_card_number,
    is_valid_length_for_network,
    luhn_check,
    parse_structure,
    validate_card,
)
from fintools_gateway.domain.exceptions import (
    InvalidInputError,
    InvalidInputFormatError,
    InvalidInputLengthError,
    UnsupportedNetworkError,
)

KNOWN_CARD = "4159482847593853"


def test_luhn_known_vector():
    assert luhn_check(KNOWN_CARD)
    assert luhn_check("4159 4828 4759 3853")


def test_luhn_empty_is_false():
    assert not luhn_check("")


def test_luhn_detects_single_digit_mutations():
    for position in range(len(KNOWN_CARD)):
        for delta in range(1, 10):
            digit = (int(KNOWN_CARD[position]) + delta) % 10
            mutated = KNOWN_CARD[:position] + str(digit) + KNOWN_CARD[position + 1 :]
            assert not luhn_check(mutated)


@pytest.mark.parametrize(
    "number,network",
    [
        ("4111111111111111", VISA),
        ("5105105105105100", MASTERCARD),
        ("2221000000000009", MASTERCARD),
        ("2720990000000000", MASTERCARD),
        ("378282246310005", AMEX),
        ("341111111111111", AMEX),
        ("30569309025904", DINERS),
        ("36000000000000", DINERS),
        ("38000000000000", DINERS),
        ("6011111111111117", DISCOVER),
        ("6500000000000000", DISCOVER),
        ("6440000000000000", DISCOVER),
        ("3530111333300000", JCB),
        ("5600000000000000", MAESTRO),
        ("6430000000000000", MAESTRO),
        ("6762030000000000", MAESTRO),
    ],
)
def test_classify_network(number, network):
    assert classify_network(number) == network


def test_classify_network_unknown_ranges():
    assert classify_network("2721000000000000") is None
    assert classify_network("3060000000000000") is None
    assert classify_network("1234567890123456") is None
    assert classify_network("") is None


def test_network_lengths():
    assert is_valid_length_for_network("4" * 13, VISA)
    assert not is_valid_length_for_network("4" * 15, VISA)
    assert is_valid_length_for_network("3" * 15, AMEX)
    assert is_valid_length_for_network("6" * 12, MAESTRO)
    assert is_valid_length_for_network("1" * 19, None)
    assert not is_valid_length_for_network("1" * 12, None)


def test_allowed_lengths_unknown_network():
    with pytest.raises(UnsupportedNetworkError):
        allowed_lengths("Dankort")


def test_parse_structure_default_bin_length():
    structure = parse_structure(KNOWN_CARD)
    assert structure.mii == "4"
    assert structure.mii_description == "Banking and financial"
    assert structure.bin == "415948"
    assert structure.issuer_identification == "15948"
    assert structure.account_identifier == "284759385"
    assert structure.check_digit == "3"


def test_parse_structure_short_and_empty():
    short = parse_structure("4159")
    assert short.bin == "4159"
    assert short.account_identifier == ""
    assert parse_structure("").mii == ""


def test_generate_check_digit():
    assert generate_check_digit(KNOWN_CARD[:-1]) == 3


@pytest.mark.parametrize("bin_length", [6, 7, 8])
@pytest.mark.parametrize("target_length", range(13, 20))
def test_generate_test_card_number_round_trip(bin_length, target_length):
    bin_ = KNOWN_CARD[:bin_length]
    number = generate_test_card_number(bin_, target_length)
    assert len(number) == target_length
    assert number.startswith(bin_)
    assert luhn_check(number)


def test_generate_test_card_number_rejects_bad_input():
    with pytest.raises(InvalidInputLengthError):
        generate_test_card_number("41594", 16)
    with pytest.raises(InvalidInputLengthError):
        generate_test_card_number("415948284", 16)
    with pytest.raises(InvalidInputFormatError):
        generate_test_card_number("41a948", 16)
    with pytest.raises(InvalidInputLengthError):
        generate_test_card_number("415948", 12)
    with pytest.raises(InvalidInputError):
        generate_test_card_number("415948", 20)


def test_validate_card_with_bin_enrichment(bin_table):
    """Eight-digit BIN wins over the six-digit range of another bank"""
    info = validate_card(KNOWN_CARD, bin_table)
    assert info.is_valid
    assert info.errors == []
    assert info.network == VISA
    assert info.length == 16
    assert info.bank == "Zagrebačka banka d.d."
    assert info.card_category == "Credit"
    assert info.card_tier == "Gold"
    assert info.structure.bin == "41594828"
    assert info.structure.account_identifier == "4759385"


def test_validate_card_without_table():
    info = validate_card(KNOWN_CARD)
    assert info.is_valid
    assert info.bank is None
    assert info.structure.bin == "415948"


def test_validate_card_accumulates_errors():
    info = validate_card("4" * 19 + "5")
    assert info.status == "invalid"
    assert "Card number must be between 13-19 digits" in info.errors
    assert "Invalid card number (Luhn check failed)" in info.errors
    assert "Invalid length for Visa card" in info.errors


def test_short_card_is_incomplete_without_luhn_verdict():
    info = validate_card("4111")
    assert info.status == "incomplete"
    assert "Invalid card number (Luhn check failed)" not in info.errors
    assert "Card number must be between 13-19 digits" in info.errors


@pytest.mark.parametrize(
    "length,status",
    [(12, "incomplete"), (13, "valid"), (19, "valid"), (20, "invalid")],
)
def test_card_status_at_length_boundaries(length, status):
    prefix = "4" + "1" * (length - 2)
    info = validate_card(prefix + str(generate_check_digit(prefix)))
    assert info.luhn_valid
    assert info.status == status


def test_non_ascii_digits_are_not_card_digits():
    arabic_indic = "".join(chr(0x0660 + int(d)) for d in KNOWN_CARD)
    assert clean_card_number(arabic_indic) == ""
    assert validate_card(arabic_indic).status == "incomplete"


def test_validate_card_unknown_network():
    info = validate_card("1234567890123452")
    assert "Unknown card type" in info.errors
    assert info.network is None


def test_validate_card_empty():
    info = validate_card("")
    assert info.errors == ["Card number is required"]
    assert info.status == "incomplete"


def test_inactive_bin_is_not_matched(bin_table):
    number = generate_test_card_number("377851", 15)
    info = validate_card(number, bin_table)
    assert info.network == AMEX
    assert info.bank is None


@pytest.mark.parametrize("length", [0, 1, 12, 13, 19, 20])
def test_boundary_lengths_never_crash(bin_table, length):
    info = validate_card("4" * length, bin_table)
    assert info.length == length


def test_format_and_clean():
    assert format_card_number(KNOWN_CARD) == "4159 4828 4759 3853"
    assert clean_card_number("4159-4828 4759 3853 9999") == "4159482847593853999"
