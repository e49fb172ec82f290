"""Unit tests for recovery phrase validation and seed derivation"""

from fintools_gateway.domain.mnemonic import (
    entropy_checksum,
    validate_mnemonic,
)
from fintools_gateway.domain.models import MnemonicState, StepKind

ABANDON_SEED = (
    "5eb00bbddcf069084889a8ab9155568165f5c453ccb85e70811aaed6f6da5fc1"
    "9a5ac40b389cd370d086206dec8aa6c43daea6690f20ad3d8d48b2d2ce9e38e4"
)
TREZOR_SEED = (
    "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
    "1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04"
)


def test_wordlist_has_2048_words(backend):
    assert len(backend.wordlist) == 2048
    assert backend.wordlist[0] == "abandon"
    assert backend.wordlist[3] == "about"


def test_valid_phrase(backend, abandon_phrase):
    result = validate_mnemonic(abandon_phrase, backend.wordlist)
    assert result.state is MnemonicState.VALID
    assert result.is_valid
    assert result.entropy_hex == "00" * 16
    assert result.steps[-1].outcome_kind is StepKind.SUCCESS


def test_phrase_is_trimmed_and_case_insensitive(backend, abandon_phrase):
    result = validate_mnemonic("  " + abandon_phrase.upper().replace(" ", "   ") + "\n", backend.wordlist)
    assert result.is_valid
    assert len(result.words) == 12


def test_empty_phrase(backend):
    result = validate_mnemonic("   ", backend.wordlist)
    assert result.state is MnemonicState.EMPTY
    assert result.entropy_hex is None


def test_wrong_word_count(backend):
    for count in (1, 11, 13, 24):
        result = validate_mnemonic(" ".join(["abandon"] * count), backend.wordlist)
        assert result.state is MnemonicState.WRONG_WORD_COUNT


def test_unknown_words_are_listed(backend):
    phrase = "abandon " * 10 + "xyzzy plugh"
    result = validate_mnemonic(phrase, backend.wordlist)
    assert result.state is MnemonicState.UNKNOWN_WORDS
    assert result.invalid_words == ["xyzzy", "plugh"]


def test_checksum_mismatch(backend):
    """Twelve 'abandon' are all-zero bits, but SHA-256 of zero entropy starts with 0011"""
    result = validate_mnemonic("abandon " * 12, backend.wordlist)
    assert result.state is MnemonicState.CHECKSUM_MISMATCH
    assert result.entropy_hex is None
    assert result.steps[-1].outcome_kind is StepKind.FAILURE


def test_entropy_checksum_of_zero_entropy():
    assert entropy_checksum(bytes(16)) == 0b0011


def test_seed_vector(backend, abandon_phrase):
    assert backend.seed_from_phrase(abandon_phrase, "").hex() == ABANDON_SEED


def test_seed_with_passphrase(backend, abandon_phrase):
    assert backend.seed_from_phrase(abandon_phrase, "TREZOR").hex() == TREZOR_SEED


def test_validation_is_idempotent(backend, abandon_phrase):
    first = validate_mnemonic(abandon_phrase, backend.wordlist)
    second = validate_mnemonic(abandon_phrase, backend.wordlist)
    assert first == second
