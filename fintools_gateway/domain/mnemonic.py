"""BIP-39 recovery phrase validation"""

import hashlib
from typing import Dict, List, Sequence

from fintools_gateway.domain.models import ChecksumStep, MnemonicState, MnemonicValidation, StepKind

WORD_COUNT = 12
BITS_PER_WORD = 11
ENTROPY_BITS = 128
CHECKSUM_BITS = WORD_COUNT * BITS_PER_WORD - ENTROPY_BITS  # 4


def split_phrase(phrase: str) -> List[str]:
    """Trimmed, lower-cased words of a phrase"""
    return phrase.strip().lower().split()


def entropy_checksum(entropy: bytes) -> int:
    """Leading CHECKSUM_BITS bits of SHA-256 over the raw entropy"""
    return hashlib.sha256(entropy).digest()[0] >> (8 - CHECKSUM_BITS)


def words_to_bits(words: Sequence[str], index: Dict[str, int]) -> int:
    """Concatenate the 11-bit wordlist indices into one integer"""
    bits = 0
    for word in words:
        bits = (bits << BITS_PER_WORD) | index[word]
    return bits


def validate_mnemonic(phrase: str, wordlist: Sequence[str]) -> MnemonicValidation:
    """
    Run the recovery phrase through word count, wordlist membership and checksum.

    The first failing stage is terminal. On success the 128-bit entropy is
    returned as 32 hex characters.
    """
    words = split_phrase(phrase)
    steps: List[ChecksumStep] = []

    if not words:
        steps.append(ChecksumStep("Waiting for input", output=f"Enter a {WORD_COUNT}-word recovery phrase"))
        return MnemonicValidation(state=MnemonicState.EMPTY, words=words, steps=steps)

    count_ok = len(words) == WORD_COUNT
    steps.append(
        ChecksumStep(
            "Word count",
            inputs=f"{len(words)} words",
            output=f"required {WORD_COUNT}",
            outcome_kind=StepKind.SUCCESS if count_ok else StepKind.FAILURE,
        )
    )
    if not count_ok:
        return MnemonicValidation(state=MnemonicState.WRONG_WORD_COUNT, words=words, steps=steps)

    index = {word: i for i, word in enumerate(wordlist)}
    invalid_words = [word for word in words if word not in index]
    steps.append(
        ChecksumStep(
            "Wordlist membership",
            computation=", ".join(invalid_words) if invalid_words else "all words found",
            output=f"{len(invalid_words)} unknown words",
            outcome_kind=StepKind.FAILURE if invalid_words else StepKind.SUCCESS,
        )
    )
    if invalid_words:
        return MnemonicValidation(
            state=MnemonicState.UNKNOWN_WORDS, words=words, invalid_words=invalid_words, steps=steps
        )

    bits = words_to_bits(words, index)
    entropy_int = bits >> CHECKSUM_BITS
    given = bits & ((1 << CHECKSUM_BITS) - 1)
    entropy = entropy_int.to_bytes(ENTROPY_BITS // 8, "big")
    expected = entropy_checksum(entropy)
    steps.append(
        ChecksumStep(
            "Bit stream",
            computation=f"{WORD_COUNT} words × {BITS_PER_WORD} bits",
            output=f"{ENTROPY_BITS} entropy bits + {CHECKSUM_BITS} checksum bits",
            outcome_kind=StepKind.INTERMEDIATE,
        )
    )
    checksum_ok = given == expected
    steps.append(
        ChecksumStep(
            "Checksum",
            computation=f"first {CHECKSUM_BITS} bits of SHA-256(entropy)",
            output=f"expected {expected:04b}, given {given:04b}",
            outcome_kind=StepKind.SUCCESS if checksum_ok else StepKind.FAILURE,
        )
    )
    if not checksum_ok:
        return MnemonicValidation(state=MnemonicState.CHECKSUM_MISMATCH, words=words, steps=steps)

    return MnemonicValidation(state=MnemonicState.VALID, words=words, entropy_hex=entropy.hex(), steps=steps)

