"""Unit tests for multichain key derivation"""

import base58
import pytest
from nacl.signing import SigningKey
from fintools_gateway.domain.derivation import CHAINS, derive_chain, derive_keys, select_chains
from fintools_gateway.domain.exceptions import UnsupportedChainError
from fintools_gateway.domain.models import MnemonicState


@pytest.fixture(scope="module")
def abandon_keys(backend):
    validation, derived = derive_keys("abandon " * 11 + "about", backend)
    assert validation.is_valid
    return {key.chain: key for key in derived.keys}


def test_derives_all_six_chains_in_order(backend, abandon_phrase):
    _, derived = derive_keys(abandon_phrase, backend)
    assert [key.chain for key in derived.keys] == [config.chain for config in CHAINS]
    assert derived.entropy_hex == "00" * 16
    assert derived.seed_hex.startswith("5eb00bbddcf069084889a8ab9155568165f5c453")


def test_ethereum_vector(abandon_keys):
    key = abandon_keys["ethereum"]
    assert key.derivation_path == "m/44'/60'/0'/0/0"
    assert key.address == "0x9858effd232b4033e47d90003d41ec34ecaeda94"
    assert key.public_key.startswith("04")
    assert len(key.public_key) == 130
    assert len(key.private_key) == 64


def test_bitcoin_legacy_vector(abandon_keys):
    key = abandon_keys["bitcoin-legacy"]
    assert key.address == "1LqBGSKuX5yYUonjxT5qGfpUsXKYYWeabA"
    assert key.private_key[0] in "KL"  # compressed WIF


def test_bitcoin_segwit_vector(abandon_keys):
    key = abandon_keys["bitcoin-segwit"]
    assert key.address == "bc1qcr8te4kr609gcawutmrza0j4xv80jy8z306fyu"
    assert key.public_key == "0330d54fd0dd420a6e5f8d3624f5f3482cae350f79d5f0753bf5beef9c2d91af3c"
    assert key.private_key == "KyZpNDKnfs94vbrwhJneDi77V6jF64PWPF8x5cdJb8ifgg2DUc9d"


def test_bitcoin_taproot_vector(abandon_keys):
    key = abandon_keys["bitcoin-taproot"]
    assert key.derivation_path == "m/86'/0'/0'/0/0"
    assert key.public_key == "cc8a4bc64d897bddc5fbc2f670f7a8ba0b386779106cf1223c6fc5d7cd6fc115"
    assert key.address == "bc1p5cyxnuxmeuwuvkwfem96lqzszd02n6xdcjrs20cac6yqjjwudpxqkedrcr"


def test_tron_vector(abandon_keys):
    key = abandon_keys["tron"]
    assert key.derivation_path == "m/44'/195'/0'/0/0"
    assert key.address == "TUEZSdKsoDHQMeZwihtdoBiN46zxhGWYdH"
    payload = base58.b58decode_check(key.address)
    assert key.address.startswith("T")
    assert len(payload) == 21
    assert payload[0] == 0x41


def test_solana_key_layout(abandon_keys):
    """64-byte secret is seed || public key, and the public key is the address"""
    key = abandon_keys["solana"]
    assert key.address == "GjJyeC1r2RgkuoCWMyPYkCWSGSGLcz266EaAkLA27AhL"
    public_key = base58.b58decode(key.public_key)
    secret = base58.b58decode(key.private_key)
    assert key.derivation_path == "m/44'/501'/0'"
    assert key.address == key.public_key
    assert len(public_key) == 32
    assert len(secret) == 64
    assert secret[32:] == public_key
    assert SigningKey(secret[:32]).verify_key.encode() == public_key


def test_invalid_phrase_yields_no_key_material(backend):
    validation, derived = derive_keys("abandon " * 12, backend)
    assert validation.state is MnemonicState.CHECKSUM_MISMATCH
    assert derived is None


def test_chain_selection(backend, abandon_phrase):
    _, derived = derive_keys(abandon_phrase, backend, chains=["solana", "Ethereum"])
    assert [key.chain for key in derived.keys] == ["solana", "ethereum"]


def test_unknown_chain_raises(backend, abandon_phrase):
    with pytest.raises(UnsupportedChainError):
        derive_keys(abandon_phrase, backend, chains=["dogecoin"])
    with pytest.raises(UnsupportedChainError):
        select_chains(["bitcoin", "solana"])


def test_passphrase_changes_every_address(backend, abandon_phrase, abandon_keys):
    _, derived = derive_keys(abandon_phrase, backend, passphrase="TREZOR")
    for key in derived.keys:
        assert key.address != abandon_keys[key.chain].address


def test_derivation_is_deterministic(backend, abandon_phrase):
    seed = backend.seed_from_phrase(abandon_phrase, "")
    assert derive_chain(backend, "bitcoin-taproot", seed) == derive_chain(backend, "bitcoin-taproot", seed)
