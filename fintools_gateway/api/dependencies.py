"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache
from fastapi import Request
from fintools_gateway.config import settings
from fintools_gateway.domain.bins import BinTable
from fintools_gateway.infrastructure.crypto.backend import CryptoBackend, load_crypto_backend


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache(maxsize=1)
def get_crypto_backend() -> CryptoBackend:
    """
    Provide the cryptographic capability bundle, built once per process.

    A failed load is not cached, so the next request retries it.
    """
    return load_crypto_backend(settings.wordlist_language)


@lru_cache(maxsize=1)
def get_bin_table() -> BinTable:
    """Provide the BIN table from the configured file, or the packaged sample"""
    return BinTable.from_json(settings.bin_table_path)
