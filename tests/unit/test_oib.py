"""Unit tests for the OIB checksum engine"""

import pytest
from fintools_gateway.domain.exceptions import InvalidInputFormatError, InvalidInputLengthError
from fintools_gateway.domain.oib import compute_oib_check_digit, explain_oib, generate_oib, validate_oib


def test_known_oib():
    assert compute_oib_check_digit("1234567890") == 3
    assert validate_oib("12345678903")


def test_wrong_control_digit_is_invalid():
    for digit in "012456789":
        assert not validate_oib("1234567890" + digit)


def test_validate_oib_rejects_bad_shapes():
    assert not validate_oib("")
    assert not validate_oib("1234567890")
    assert not validate_oib("123456789031")
    assert not validate_oib("1234567890a")


def test_compute_check_digit_requires_ten_digits():
    with pytest.raises(InvalidInputLengthError):
        compute_oib_check_digit("123456789")
    with pytest.raises(InvalidInputFormatError):
        compute_oib_check_digit("12345x7890")


def test_generate_oib_completes_base():
    assert generate_oib("1234567890") == "12345678903"


def test_generate_oib_random_is_valid():
    for _ in range(50):
        oib = generate_oib()
        assert len(oib) == 11
        assert validate_oib(oib)


def test_explain_oib_states():
    assert explain_oib("").status == "incomplete"
    assert explain_oib("12345").status == "incomplete"
    assert explain_oib("123456789031").status == "invalid"

    valid = explain_oib("12345678903")
    assert valid.is_valid
    assert valid.steps[-1].stage_label == "OIB: control digit"

    wrong = explain_oib("12345678904")
    assert wrong.status == "invalid"
    assert wrong.error_kind == "ChecksumMismatch"


@pytest.mark.parametrize("length", [0, 1, 10, 11, 12])
def test_boundary_lengths_never_crash(length):
    value = "9" * length
    assert validate_oib(value) in (True, False)
    assert explain_oib(value).status in {"valid", "invalid", "incomplete"}


def test_non_ascii_digits_agree_across_entry_points():
    arabic_indic = "".join(chr(0x0660 + int(d)) for d in "12345678903")
    assert not validate_oib(arabic_indic)
    assert not explain_oib(arabic_indic).is_valid
