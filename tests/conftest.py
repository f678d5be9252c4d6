# tests/conftest.py
import pytest

from pkg_jwt.adapters.keystore.memory import generate_rsa_pem_pair

NOW = 1_700_000_000


@pytest.fixture(scope="session")
def rsa_pair():
    """(private PEM, public PEM), generated once per test session."""
    return generate_rsa_pem_pair(2048)


@pytest.fixture(scope="session")
def other_rsa_pair():
    return generate_rsa_pem_pair(2048)


@pytest.fixture
def now():
    return NOW
