"""OIB (Croatian personal/legal identification number) checksum engine"""

import secrets
from typing import List, Optional

from fintools_gateway.domain.checksums import control_digit_steps, mod11_step
from fintools_gateway.domain.exceptions import ChecksumMismatchError, InvalidInputLengthError
from fintools_gateway.domain.models import ChecksumStep, StepKind, ValidationResult
from fintools_gateway.utils.digits import clean_digits, require_digits

OIB_LENGTH = 11
BASE_LENGTH = 10


def compute_oib_check_digit(base_digits: str) -> int:
    """Control digit for exactly 10 base digits"""
    require_digits(base_digits, BASE_LENGTH, "OIB base")
    return mod11_step(base_digits)


def validate_oib(oib: str) -> bool:
    """True if oib has 11 digits and the last one matches the recomputed control digit"""
    if len(oib) != OIB_LENGTH or not oib.isascii() or not oib.isdigit():
        return False
    return mod11_step(oib[:BASE_LENGTH]) == int(oib[BASE_LENGTH])


def generate_oib(base_digits: Optional[str] = None) -> str:
    """Complete a 10-digit base with its control digit; a random base is drawn when none is given"""
    if base_digits is None:
        base_digits = "".join(str(secrets.randbelow(10)) for _ in range(BASE_LENGTH))
    return base_digits + str(compute_oib_check_digit(base_digits))


def explain_oib(oib: str) -> ValidationResult:
    """Validate an OIB and record the per-digit computation"""
    value = clean_digits(oib)
    steps: List[ChecksumStep] = []

    if not value:
        steps.append(ChecksumStep("Waiting for input", output="Enter an OIB to validate"))
        return ValidationResult(is_valid=False, incomplete=True, steps=steps)

    steps.append(ChecksumStep("Input", inputs=oib, output=value))

    if len(value) != OIB_LENGTH:
        steps.append(
            ChecksumStep(
                "Length check",
                output=f"{len(value)}/{OIB_LENGTH} digits",
                outcome_kind=StepKind.FAILURE,
            )
        )
        return ValidationResult(
            is_valid=False,
            incomplete=len(value) < OIB_LENGTH,
            error_kind=InvalidInputLengthError.error_kind,
            errors=[f"OIB must have exactly {OIB_LENGTH} digits, got {len(value)}"],
            steps=steps,
        )
    steps.append(ChecksumStep("Length check", output=f"{OIB_LENGTH} digits", outcome_kind=StepKind.SUCCESS))
    steps.append(ChecksumStep("Structure", inputs=value, output=f"base {value[:BASE_LENGTH]}, control {value[-1]}"))

    steps.extend(control_digit_steps("OIB", value))
    if steps[-1].outcome_kind is StepKind.FAILURE:
        return ValidationResult(
            is_valid=False,
            error_kind=ChecksumMismatchError.error_kind,
            errors=["OIB control digit does not match"],
            steps=steps,
        )
    return ValidationResult(is_valid=True, steps=steps)
