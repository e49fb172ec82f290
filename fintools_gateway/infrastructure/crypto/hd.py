"""Hierarchical deterministic key trees: BIP32 over secp256k1 and SLIP-0010 over ed25519"""

from dataclasses import dataclass
from typing import List

from bip_utils import Bip32Slip10Ed25519, Bip32Slip10Secp256k1

from fintools_gateway.domain.exceptions import InvalidInputError, InvalidInputFormatError

HARDENED = 0x80000000


@dataclass(frozen=True)
class ExtendedKey:
    """Private key plus chain code at one node of the tree"""

    secret: bytes
    chain_code: bytes


def parse_path(path: str) -> List[int]:
    """
    Turn "m/44'/60'/0'/0/0" into child indices, hardened ones offset by 2^31.

    Raises:
        InvalidInputFormatError: path does not start with "m" or has a bad segment
    """
    segments = path.strip().split("/")
    if not segments or segments[0] != "m":
        raise InvalidInputFormatError(f"Derivation path must start with 'm': {path}")

    indices = []
    for segment in segments[1:]:
        hardened = segment.endswith(("'", "h", "H"))
        number = segment[:-1] if hardened else segment
        if not number.isascii() or not number.isdigit() or int(number) >= HARDENED:
            raise InvalidInputFormatError(f"Invalid derivation path segment {segment!r} in {path}")
        indices.append(int(number) + HARDENED if hardened else int(number))
    return indices


class Bip32Derivation:
    """BIP32 private derivation on secp256k1"""

    context_class = Bip32Slip10Secp256k1

    def _extended(self, node) -> ExtendedKey:
        return ExtendedKey(secret=node.PrivateKey().Raw().ToBytes(), chain_code=node.ChainCode().ToBytes())

    def _check_index(self, index: int) -> None:
        pass

    def master(self, seed: bytes) -> ExtendedKey:
        return self._extended(self.context_class.FromSeed(seed))

    def derive_path(self, seed: bytes, path: str) -> ExtendedKey:
        indices = parse_path(path)
        for index in indices:
            self._check_index(index)

        node = self.context_class.FromSeed(seed)
        for index in indices:
            node = node.ChildKey(index)
        return self._extended(node)


class Slip10Derivation(Bip32Derivation):
    """SLIP-0010 derivation on ed25519; only hardened children exist on this curve"""

    context_class = Bip32Slip10Ed25519

    def _check_index(self, index: int) -> None:
        if index < HARDENED:
            raise InvalidInputError("ed25519 derivation supports hardened indices only")
