"""Elliptic curve operations backed by coincurve (secp256k1) and PyNaCl (ed25519)"""

from coincurve import PublicKey
from nacl.signing import SigningKey

# secp256k1 group order (n)
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class Secp256k1Ops:
    """Point arithmetic needed by BIP32, address encoding and the taproot tweak"""

    name = "secp256k1"
    order = SECP256K1_ORDER

    def public_key(self, secret: bytes, compressed: bool = True) -> bytes:
        return PublicKey.from_secret(secret).format(compressed=compressed)

    def tweak_add(self, public_key: bytes, tweak: bytes) -> bytes:
        """P + t*G, returned compressed"""
        return PublicKey(public_key).add(tweak).format(compressed=True)

    def negate(self, secret: bytes) -> bytes:
        """n - k, the private key of the point with the opposite y parity"""
        return (self.order - int.from_bytes(secret, "big")).to_bytes(32, "big")


class Ed25519Ops:
    """Keypair from a 32-byte ed25519 seed"""

    name = "ed25519"

    def public_key(self, seed: bytes) -> bytes:
        return SigningKey(seed).verify_key.encode()
