"""Croatian IBAN, bank code and account number checksum engine"""

import re
from typing import List

from fintools_gateway.domain.banks import find_bank
from fintools_gateway.domain.checksums import (
    control_digit_steps,
    letters_to_digits,
    mod11_step,
    mod97,
    rotate_iban,
)
from fintools_gateway.domain.exceptions import (
    ChecksumMismatchError,
    InvalidInputError,
    InvalidInputFormatError,
    InvalidInputLengthError,
)
from fintools_gateway.domain.models import ChecksumStep, IbanBreakdown, StepKind, ValidationResult
from fintools_gateway.utils.digits import require_digits

COUNTRY_CODE = "HR"
IBAN_LENGTH = 21
BANK_CODE_LENGTH = 7
ACCOUNT_NUMBER_LENGTH = 10

_WHITESPACE = re.compile(r"\s+")
_ALNUM = re.compile(r"^[A-Z0-9]+$")


def normalize_iban(iban: str) -> str:
    """Drop whitespace and upper-case, so 'hr83 2360 ...' is accepted"""
    return _WHITESPACE.sub("", iban or "").upper()


def compute_iban_check_digits(bank_code: str, account_number: str) -> str:
    """
    Two IBAN check digits for a Croatian bank code and account number.

    Builds 'HR00' + bank + account, rotates the first four characters to the
    end, maps letters to numbers and returns 98 - (number mod 97), zero padded.
    """
    require_digits(bank_code, BANK_CODE_LENGTH, "Bank code")
    require_digits(account_number, ACCOUNT_NUMBER_LENGTH, "Account number")

    scratch = f"{COUNTRY_CODE}00{bank_code}{account_number}"
    remainder = mod97(letters_to_digits(rotate_iban(scratch)))
    return f"{98 - remainder:02d}"


def validate_iban(iban: str) -> bool:
    """True if iban is a 21-character HR IBAN whose mod-97 remainder is 1"""
    value = normalize_iban(iban)
    if len(value) != IBAN_LENGTH or not value.startswith(COUNTRY_CODE):
        return False
    if not value[2:].isascii() or not value[2:].isdigit():
        return False
    return mod97(letters_to_digits(rotate_iban(value))) == 1


def _validate_control(value: str, length: int, label: str) -> bool:
    require_digits(value, length, label)
    return mod11_step(value[:-1]) == int(value[-1])


def validate_bank_code(bank_code: str) -> bool:
    """Bank code: 6 base digits + 1 mod-11 control digit"""
    return _validate_control(bank_code, BANK_CODE_LENGTH, "Bank code")


def validate_account_number(account_number: str) -> bool:
    """Account number: 9 base digits + 1 mod-11 control digit"""
    return _validate_control(account_number, ACCOUNT_NUMBER_LENGTH, "Account number")


def generate_iban(bank_code: str, account_number: str) -> str:
    """
    Assemble a Croatian IBAN from a bank code and an account number.

    Raises:
        InvalidInputLengthError / InvalidInputFormatError: malformed input
        ChecksumMismatchError: the bank or account control digit is wrong
    """
    if not validate_bank_code(bank_code):
        raise ChecksumMismatchError(f"Bank code {bank_code} has an invalid control digit")
    if not validate_account_number(account_number):
        raise ChecksumMismatchError(f"Account number {account_number} has an invalid control digit")

    check_digits = compute_iban_check_digits(bank_code, account_number)
    return f"{COUNTRY_CODE}{check_digits}{bank_code}{account_number}"


def generate_iban_for_bank(bank: str, account_number: str) -> str:
    """Same as generate_iban, with the bank given by name or code from the directory"""
    found = find_bank(bank)
    if found is None:
        raise InvalidInputError(f"Unknown bank: {bank}")
    return generate_iban(found.code, account_number)


def parse_iban(iban: str) -> IbanBreakdown:
    """Split a Croatian IBAN into country code, check digits, bank code and account number"""
    value = normalize_iban(iban)
    if len(value) != IBAN_LENGTH:
        raise InvalidInputLengthError(f"IBAN must have {IBAN_LENGTH} characters, got {len(value)}")
    if not value.startswith(COUNTRY_CODE) or not value[2:].isascii() or not value[2:].isdigit():
        raise InvalidInputFormatError(f"IBAN must be {COUNTRY_CODE} followed by 19 digits")
    return IbanBreakdown(
        country_code=value[:2],
        check_digits=value[2:4],
        bank_code=value[4:11],
        account_number=value[11:],
    )


def explain_iban(iban: str) -> ValidationResult:
    """
    Validate a Croatian IBAN and record every stage.

    Once the length is right all three checksums run, so the caller sees
    every failing rule at once.
    """
    value = normalize_iban(iban)
    steps: List[ChecksumStep] = []
    errors: List[str] = []
    kinds: List[str] = []

    if not value:
        steps.append(ChecksumStep("Waiting for input", output="Enter an IBAN to validate"))
        return ValidationResult(is_valid=False, incomplete=True, steps=steps)

    steps.append(ChecksumStep("Input", inputs=iban, output=value))

    if len(value) != IBAN_LENGTH:
        steps.append(
            ChecksumStep(
                "Length check",
                inputs=value,
                output=f"{len(value)}/{IBAN_LENGTH} characters",
                outcome_kind=StepKind.FAILURE,
            )
        )
        return ValidationResult(
            is_valid=False,
            incomplete=len(value) < IBAN_LENGTH,
            error_kind=InvalidInputLengthError.error_kind,
            errors=[f"IBAN must have {IBAN_LENGTH} characters, got {len(value)}"],
            steps=steps,
        )
    steps.append(ChecksumStep("Length check", output=f"{IBAN_LENGTH} characters", outcome_kind=StepKind.SUCCESS))

    if not value.startswith(COUNTRY_CODE):
        errors.append(f"IBAN must start with {COUNTRY_CODE}, got {value[:2]}")
        kinds.append(InvalidInputFormatError.error_kind)
        steps.append(ChecksumStep("Country code", inputs=value[:2], output="not HR", outcome_kind=StepKind.FAILURE))
    else:
        steps.append(ChecksumStep("Country code", inputs=value[:2], output="Croatia", outcome_kind=StepKind.SUCCESS))

    if not _ALNUM.match(value) or not value[2:].isascii() or not value[2:].isdigit():
        errors.append("After the country code an IBAN may only contain digits")
        kinds.append(InvalidInputFormatError.error_kind)
        steps.append(ChecksumStep("Character check", inputs=value[2:], outcome_kind=StepKind.FAILURE))
        return ValidationResult(is_valid=False, error_kind=kinds[0], errors=errors, steps=steps)

    rotated = rotate_iban(value)
    steps.append(
        ChecksumStep(
            "Rotation",
            inputs=value,
            computation=f"{value[4:]} + {value[:4]}",
            output=rotated,
            outcome_kind=StepKind.INTERMEDIATE,
        )
    )
    numeric = letters_to_digits(rotated)
    steps.append(
        ChecksumStep(
            "Letter to number mapping",
            inputs=rotated,
            computation=", ".join(f"{c}={ord(c) - 55}" for c in value[:2] if c.isalpha()),
            output=numeric,
            outcome_kind=StepKind.INTERMEDIATE,
        )
    )
    remainder = mod97(numeric)
    if remainder == 1:
        steps.append(
            ChecksumStep("Modulo 97", computation=f"{numeric} mod 97", output="1", outcome_kind=StepKind.SUCCESS)
        )
    else:
        errors.append(f"IBAN check digits are wrong (mod 97 remainder {remainder}, expected 1)")
        kinds.append(ChecksumMismatchError.error_kind)
        steps.append(
            ChecksumStep(
                "Modulo 97",
                computation=f"{numeric} mod 97",
                output=str(remainder),
                outcome_kind=StepKind.FAILURE,
            )
        )

    bank_code, account_number = value[4:11], value[11:]
    for label, part in (("Bank code", bank_code), ("Account number", account_number)):
        part_steps = control_digit_steps(label, part)
        steps.extend(part_steps)
        if part_steps[-1].outcome_kind is StepKind.FAILURE:
            errors.append(f"{label} {part} has an invalid control digit")
            kinds.append(ChecksumMismatchError.error_kind)

    return ValidationResult(
        is_valid=not errors,
        error_kind=kinds[0] if kinds else None,
        errors=errors,
        steps=steps,
    )
