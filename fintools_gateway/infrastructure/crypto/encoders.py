"""Address and key encodings: Base58/Base58Check, bech32/bech32m, Keccak-256, HASH160"""

import hashlib

import base58
from bip_utils import SegwitBech32Encoder
from Crypto.Hash import RIPEMD160, keccak

BITCOIN_HRP = "bc"
P2PKH_VERSION = b"\x00"
WIF_VERSION = b"\x80"
TRON_PREFIX = b"\x41"
MAX_WITNESS_VERSION = 16


class AddressEncoder:
    """Chain address formats built from public keys"""

    def keccak256(self, data: bytes) -> bytes:
        return keccak.new(digest_bits=256, data=data).digest()

    def hash160(self, data: bytes) -> bytes:
        return RIPEMD160.new(hashlib.sha256(data).digest()).digest()

    def tagged_hash(self, tag: str, data: bytes) -> bytes:
        """BIP340 tagged hash: sha256(sha256(tag) || sha256(tag) || data)"""
        tag_digest = hashlib.sha256(tag.encode()).digest()
        return hashlib.sha256(tag_digest + tag_digest + data).digest()

    def base58(self, data: bytes) -> str:
        return base58.b58encode(data).decode()

    def base58check(self, data: bytes) -> str:
        return base58.b58encode_check(data).decode()

    def segwit(self, witness_version: int, program: bytes, hrp: str = BITCOIN_HRP) -> str:
        """bech32 (BIP173) for version 0 programs, bech32m (BIP350) for version 1 and up"""
        if not 0 <= witness_version <= MAX_WITNESS_VERSION or not 2 <= len(program) <= 40:
            raise ValueError(f"Cannot encode witness v{witness_version} program of {len(program)} bytes")
        if witness_version == 0 and len(program) not in (20, 32):
            raise ValueError(f"Witness v0 program must be 20 or 32 bytes, got {len(program)}")
        return SegwitBech32Encoder.Encode(hrp, witness_version, program)

    def ethereum(self, uncompressed_public_key: bytes) -> str:
        """0x + last 20 bytes of Keccak-256 over the 64-byte X||Y key"""
        return "0x" + self.keccak256(uncompressed_public_key[1:])[-20:].hex()

    def tron(self, uncompressed_public_key: bytes) -> str:
        return self.base58check(TRON_PREFIX + self.keccak256(uncompressed_public_key[1:])[-20:])

    def p2pkh(self, compressed_public_key: bytes) -> str:
        return self.base58check(P2PKH_VERSION + self.hash160(compressed_public_key))

    def p2wpkh(self, compressed_public_key: bytes) -> str:
        return self.segwit(0, self.hash160(compressed_public_key))

    def p2tr(self, x_only_output_key: bytes) -> str:
        return self.segwit(1, x_only_output_key)

    def wif(self, secret: bytes) -> str:
        """Wallet import format for a key whose public key is used compressed"""
        return self.base58check(WIF_VERSION + secret + b"\x01")
