"""Capability bundle of cryptographic primitives used by the mnemonic deriver"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from fintools_gateway.domain.exceptions import PrimitiveUnavailableError

if TYPE_CHECKING:
    from fintools_gateway.infrastructure.crypto.curves import Ed25519Ops, Secp256k1Ops
    from fintools_gateway.infrastructure.crypto.encoders import AddressEncoder
    from fintools_gateway.infrastructure.crypto.hd import Bip32Derivation, Slip10Derivation

WORDLIST_SIZE = 2048

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CryptoBackend:
    """Everything the deriver needs from third-party libraries, passed in explicitly"""

    secp256k1: "Secp256k1Ops"
    ed25519: "Ed25519Ops"
    bip32: "Bip32Derivation"
    slip10: "Slip10Derivation"
    encoder: "AddressEncoder"
    wordlist: Sequence[str]
    seed_from_phrase: Callable[[str, str], bytes]  # BIP39 PBKDF2 seed from phrase and passphrase


def load_crypto_backend(language: str = "english") -> CryptoBackend:
    """
    Import the cryptographic libraries and build the capability bundle.

    Raises:
        PrimitiveUnavailableError: a library is missing or returned an unusable wordlist
    """
    try:
        from mnemonic import Mnemonic

        from fintools_gateway.infrastructure.crypto.curves import Ed25519Ops, Secp256k1Ops
        from fintools_gateway.infrastructure.crypto.encoders import AddressEncoder
        from fintools_gateway.infrastructure.crypto.hd import Bip32Derivation, Slip10Derivation
    except ImportError as e:
        logger.error(f"Cryptographic library unavailable: {e}")
        raise PrimitiveUnavailableError(f"Cryptographic library unavailable: {e.name}") from e

    try:
        wordlist = tuple(Mnemonic(language).wordlist)
    except Exception as e:
        raise PrimitiveUnavailableError(f"Cannot load {language} wordlist: {e}") from e
    if len(wordlist) != WORDLIST_SIZE:
        raise PrimitiveUnavailableError(f"Wordlist has {len(wordlist)} words, expected {WORDLIST_SIZE}")

    secp256k1 = Secp256k1Ops()
    ed25519 = Ed25519Ops()
    logger.info("Crypto backend loaded", extra={"wordlist_language": language})
    return CryptoBackend(
        secp256k1=secp256k1,
        ed25519=ed25519,
        bip32=Bip32Derivation(),
        slip10=Slip10Derivation(),
        encoder=AddressEncoder(),
        wordlist=wordlist,
        seed_from_phrase=Mnemonic.to_seed,
    )
