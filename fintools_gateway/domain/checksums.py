"""Checksum primitives shared by the IBAN and OIB engines"""

from typing import Iterator, List, NamedTuple

from fintools_gateway.domain.exceptions import InvalidInputFormatError
from fintools_gateway.domain.models import ChecksumStep, StepKind


class Mod11Round(NamedTuple):
    """State of the mod-11 accumulator around one digit"""

    before: int
    digit: int
    after_add: int
    after_mod10: int
    after: int


def letters_to_digits(text: str) -> str:
    """Map A..Z to 10..35 (charCode - 55), keep digits as they are"""
    out = []
    for char in text:
        if "0" <= char <= "9":
            out.append(char)
        elif "A" <= char <= "Z":
            out.append(str(ord(char) - 55))
        else:
            raise InvalidInputFormatError(f"Unexpected character {char!r} in IBAN")
    return "".join(out)


def mod97(numeric: str) -> int:
    """
    Remainder of a decimal string modulo 97.

    Reduces digit by digit, left to right: r = (r * 10 + d) % 97, so the
    full number is never materialised as an integer.
    """
    remainder = 0
    for char in numeric:
        remainder = (remainder * 10 + int(char)) % 97
    return remainder


def rotate_iban(iban: str) -> str:
    """Move country code and check digits (first 4 characters) to the end"""
    return iban[4:] + iban[:4]


def mod11_rounds(base_digits: str) -> Iterator[Mod11Round]:
    """Yield the accumulator state for every base digit (ISO 7064 MOD 11,10)"""
    a = 10
    for char in base_digits:
        digit = int(char)
        before = a
        after_add = a + digit
        a = after_add % 10
        if a == 0:
            a = 10
        after_mod10 = a
        a = (a * 2) % 11
        yield Mod11Round(before, digit, after_add, after_mod10, a)


def control_digit_from_remainder(remainder: int) -> int:
    """11 - a, where both 10 and 11 collapse to 0"""
    control = 11 - remainder
    if control == 10 or control == 11:
        control = 0
    return control


def mod11_step(base_digits: str) -> int:
    """
    Control digit for bank codes (6 base digits), account numbers (9) and OIB (10).

    The three call sites must stay bit-for-bit identical, so they all go
    through this function.
    """
    a = 10
    for state in mod11_rounds(base_digits):
        a = state.after
    return control_digit_from_remainder(a)


def control_digit_steps(label: str, value: str) -> List[ChecksumStep]:
    """Trace of the mod-11 stepping function over value[:-1], checked against value[-1]"""
    base, given = value[:-1], int(value[-1])
    rounds = list(mod11_rounds(base))
    a = rounds[-1].after if rounds else 10
    expected = control_digit_from_remainder(a)

    lines = [
        f"a={r.before} + {r.digit} = {r.after_add} → mod 10 = {r.after_mod10} → ×2 mod 11 = {r.after}"
        for r in rounds
    ]
    forced = " → 0" if 11 - a >= 10 else ""
    return [
        ChecksumStep(
            stage_label=f"{label}: mod 11 stepping",
            inputs=base,
            computation="\n".join(lines),
            output=f"a = {a}",
            outcome_kind=StepKind.INTERMEDIATE,
        ),
        ChecksumStep(
            stage_label=f"{label}: control digit",
            inputs=f"a = {a}",
            computation=f"11 - {a} = {11 - a}{forced}",
            output=f"expected {expected}, given {given}",
            outcome_kind=StepKind.SUCCESS if expected == given else StepKind.FAILURE,
        ),
    ]
