"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from fintools_gateway.api.main import create_app
from fintools_gateway.domain.bins import BinTable
from fintools_gateway.infrastructure.crypto.backend import CryptoBackend, load_crypto_backend


ABANDON_PHRASE = "abandon " * 11 + "about"


@pytest.fixture(scope="session")
def backend() -> CryptoBackend:
    """Real crypto backend (coincurve, PyNaCl, pycryptodome, mnemonic wordlist)"""
    return load_crypto_backend("english")


@pytest.fixture
def bin_table() -> BinTable:
    """Packaged sample BIN table"""
    return BinTable.from_json()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def abandon_phrase() -> str:
    """Standard BIP-39 test phrase with all-zero entropy"""
    return ABANDON_PHRASE
