"""Unit tests for the crypto capability bundle: curves, HD trees and encoders"""

import hashlib
import pytest
from fintools_gateway.domain.exceptions import InvalidInputError, InvalidInputFormatError, PrimitiveUnavailableError
from fintools_gateway.infrastructure.crypto.backend import load_crypto_backend
from fintools_gateway.infrastructure.crypto.hd import HARDENED, parse_path

BIP32_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
GENERATOR = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def test_parse_path():
    assert parse_path("m") == []
    assert parse_path("m/44'/60'/0'/0/1") == [44 + HARDENED, 60 + HARDENED, HARDENED, 0, 1]
    assert parse_path("m/84h/0H") == [84 + HARDENED, HARDENED]


@pytest.mark.parametrize("path", ["", "44'/0'", "m/x", "m/44''", "m//0", "m/2147483648"])
def test_parse_path_rejects_malformed(path):
    with pytest.raises(InvalidInputFormatError):
        parse_path(path)


def test_bip32_master_vector(backend):
    """BIP-32 test vector 1"""
    master = backend.bip32.master(BIP32_SEED)
    assert master.secret.hex() == "e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35"
    assert master.chain_code.hex() == "873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508"


def test_bip32_hardened_child_vector(backend):
    node = backend.bip32.derive_path(BIP32_SEED, "m/0'")
    assert node.secret.hex() == "edb2e14f9ee77d26dd93b4ecede8d16ed408ce149b6cd80b0715a2d911a0afea"
    assert node.chain_code.hex() == "47fdacbd0f1097043b78c63c20c34ef4ed9a111d980047ad16282c7ae6236141"


def test_slip10_ed25519_vector(backend):
    """SLIP-0010 ed25519 test vector 1"""
    master = backend.slip10.master(BIP32_SEED)
    assert master.secret.hex() == "2b4be7f19ee27bbf30c667b642d5f4aa69fd169872f8fc3059c08ebae2eb19e7"
    assert master.chain_code.hex() == "90046a93de5380a72b5e45010748567d5ea02bbf6522f979e05c0d8d8ca9fffb"

    child = backend.slip10.derive_path(BIP32_SEED, "m/0'")
    assert child.secret.hex() == "68e0fe46dfb67e368c75379acec591dad19df3cde26e63b93a8e704f1dade7a3"


def test_slip10_rejects_normal_children(backend):
    with pytest.raises(InvalidInputError):
        backend.slip10.derive_path(BIP32_SEED, "m/0'/1")


def test_secp256k1_generator(backend):
    secret = (1).to_bytes(32, "big")
    assert backend.secp256k1.public_key(secret).hex() == GENERATOR
    assert len(backend.secp256k1.public_key(secret, compressed=False)) == 65


def test_negate_flips_parity_only(backend):
    secret = hashlib.sha256(b"negate").digest()
    original = backend.secp256k1.public_key(secret)
    negated = backend.secp256k1.public_key(backend.secp256k1.negate(secret))
    assert original[1:] == negated[1:]
    assert {original[0], negated[0]} == {2, 3}


def test_tweak_add_is_point_addition(backend):
    """(k + t)G == kG + tG"""
    k = (5).to_bytes(32, "big")
    t = (7).to_bytes(32, "big")
    combined = backend.secp256k1.tweak_add(backend.secp256k1.public_key(k), t)
    assert combined == backend.secp256k1.public_key((12).to_bytes(32, "big"))


def test_encoder_hashes(backend):
    encoder = backend.encoder
    assert encoder.keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    assert len(encoder.hash160(b"abc")) == 20
    tag = hashlib.sha256(b"TapTweak").digest()
    assert encoder.tagged_hash("TapTweak", b"x") == hashlib.sha256(tag + tag + b"x").digest()


def test_encoder_wif_and_segwit(backend):
    encoder = backend.encoder
    assert encoder.wif((1).to_bytes(32, "big")) == "KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoWn"
    with pytest.raises(ValueError):
        encoder.segwit(0, b"\x01")


def test_unknown_wordlist_language_is_unavailable():
    with pytest.raises(PrimitiveUnavailableError):
        load_crypto_backend("klingon")


def test_witness_v1_uses_bech32m(backend):
    """BIP-350 address for the x-only generator point"""
    program = bytes.fromhex(GENERATOR[2:])
    assert backend.encoder.p2tr(program) == "bc1p0xlxvlhemja6c4dqv22uapctqupfhlxm9h8z3k2e72q4k9hcz7vqzk5jj0"
    with pytest.raises(ValueError):
        backend.encoder.segwit(17, program)
