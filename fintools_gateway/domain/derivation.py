"""Multichain key derivation from a validated recovery phrase"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from fintools_gateway.domain.exceptions import UnsupportedChainError
from fintools_gateway.domain.mnemonic import validate_mnemonic
from fintools_gateway.domain.models import DerivationResult, DerivedKeyPair, MnemonicValidation
from fintools_gateway.infrastructure.crypto.backend import CryptoBackend

BITCOIN_LEGACY = "bitcoin-legacy"
BITCOIN_SEGWIT = "bitcoin-segwit"
BITCOIN_TAPROOT = "bitcoin-taproot"
ETHEREUM = "ethereum"
TRON = "tron"
SOLANA = "solana"


@dataclass(frozen=True)
class ChainConfig:
    """Derivation path, curve and address scheme of one chain"""

    chain: str
    path: str
    curve: str
    address_kind: str


CHAINS: Tuple[ChainConfig, ...] = (
    ChainConfig(BITCOIN_LEGACY, "m/44'/0'/0'/0/0", "secp256k1", "p2pkh"),
    ChainConfig(BITCOIN_SEGWIT, "m/84'/0'/0'/0/0", "secp256k1", "p2wpkh"),
    ChainConfig(BITCOIN_TAPROOT, "m/86'/0'/0'/0/0", "secp256k1", "p2tr"),
    ChainConfig(ETHEREUM, "m/44'/60'/0'/0/0", "secp256k1", "keccak-hex"),
    ChainConfig(TRON, "m/44'/195'/0'/0/0", "secp256k1", "keccak-base58check"),
    ChainConfig(SOLANA, "m/44'/501'/0'", "ed25519", "base58"),
)
CHAINS_BY_NAME: Dict[str, ChainConfig] = {c.chain: c for c in CHAINS}


def select_chains(names: Optional[Iterable[str]]) -> List[ChainConfig]:
    """All chains when names is None, otherwise the named ones in request order"""
    if names is None:
        return list(CHAINS)
    selected = []
    for name in names:
        config = CHAINS_BY_NAME.get(name.lower())
        if config is None:
            raise UnsupportedChainError(f"Unsupported chain: {name}")
        selected.append(config)
    return selected


def _bitcoin_legacy(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.bip32.derive_path(seed, config.path)
    public_key = backend.secp256k1.public_key(node.secret, compressed=True)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        private_key=backend.encoder.wif(node.secret),
        public_key=public_key.hex(),
        address=backend.encoder.p2pkh(public_key),
    )


def _bitcoin_segwit(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.bip32.derive_path(seed, config.path)
    public_key = backend.secp256k1.public_key(node.secret, compressed=True)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        private_key=backend.encoder.wif(node.secret),
        public_key=public_key.hex(),
        address=backend.encoder.p2wpkh(public_key),
    )


def _bitcoin_taproot(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.bip32.derive_path(seed, config.path)
    secret = node.secret
    public_key = backend.secp256k1.public_key(secret, compressed=True)
    # Odd y: negate so the internal key has even parity
    if public_key[0] == 0x03:
        secret = backend.secp256k1.negate(secret)
        public_key = backend.secp256k1.public_key(secret, compressed=True)

    internal_key = public_key[1:]
    # Key-path only spend: tweak with the internal key and no script tree
    tweak = backend.encoder.tagged_hash("TapTweak", internal_key)
    output_key = backend.secp256k1.tweak_add(public_key, tweak)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        private_key=backend.encoder.wif(secret),
        public_key=internal_key.hex(),
        address=backend.encoder.p2tr(output_key[1:]),
    )


def _ethereum(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.bip32.derive_path(seed, config.path)
    public_key = backend.secp256k1.public_key(node.secret, compressed=False)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        private_key=node.secret.hex(),
        public_key=public_key.hex(),
        address=backend.encoder.ethereum(public_key),
    )


def _tron(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.bip32.derive_path(seed, config.path)
    public_key = backend.secp256k1.public_key(node.secret, compressed=False)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        private_key=node.secret.hex(),
        public_key=public_key.hex(),
        address=backend.encoder.tron(public_key),
    )


def _solana(backend: CryptoBackend, config: ChainConfig, seed: bytes) -> DerivedKeyPair:
    node = backend.slip10.derive_path(seed, config.path)
    public_key = backend.ed25519.public_key(node.secret)
    return DerivedKeyPair(
        chain=config.chain,
        derivation_path=config.path,
        # 64-byte secret key: seed || public key
        private_key=backend.encoder.base58(node.secret + public_key),
        public_key=backend.encoder.base58(public_key),
        address=backend.encoder.base58(public_key),
    )


_DERIVERS: Dict[str, Callable[[CryptoBackend, ChainConfig, bytes], DerivedKeyPair]] = {
    BITCOIN_LEGACY: _bitcoin_legacy,
    BITCOIN_SEGWIT: _bitcoin_segwit,
    BITCOIN_TAPROOT: _bitcoin_taproot,
    ETHEREUM: _ethereum,
    TRON: _tron,
    SOLANA: _solana,
}


def derive_chain(backend: CryptoBackend, chain: str, seed: bytes) -> DerivedKeyPair:
    """Key pair and address for a single chain from a 64-byte seed"""
    config = select_chains([chain])[0]
    return _DERIVERS[config.chain](backend, config, seed)


def derive_keys(
    phrase: str,
    backend: CryptoBackend,
    passphrase: str = "",
    chains: Optional[Iterable[str]] = None,
) -> Tuple[MnemonicValidation, Optional[DerivationResult]]:
    """
    Validate the phrase and, if it passes, derive keys for the requested chains.

    An invalid phrase yields (validation, None): no seed and no key material
    is computed. Unknown chain names raise UnsupportedChainError before any
    derivation happens.
    """
    selected = select_chains(chains)
    validation = validate_mnemonic(phrase, backend.wordlist)
    if not validation.is_valid:
        return validation, None

    seed = backend.seed_from_phrase(" ".join(validation.words), passphrase)
    keys = [_DERIVERS[config.chain](backend, config, seed) for config in selected]
    return validation, DerivationResult(entropy_hex=validation.entropy_hex, seed_hex=seed.hex(), keys=keys)
