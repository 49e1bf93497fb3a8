import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
import pytest


# Ensure repo root is on sys.path so 'jwtgen' is importable without installing
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Predictable settings: nothing from the developer's shell leaks in
    for name in list(os.environ):
        if name.startswith("JWTGEN_"):
            monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("jwtgen")
    for h in list(logger.handlers):
        logger.removeHandler(h); h.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def fixed_now():
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def config():
    from jwtgen.settings import GeneratorConfig
    return GeneratorConfig()


@pytest.fixture(scope="session")
def alt_keypair():
    from cryptography.hazmat.primitives.asymmetric import rsa
    from cryptography.hazmat.primitives import serialization
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    priv_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    pub_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return priv_pem, pub_pem


@pytest.fixture()
def alt_provider(alt_keypair):
    from jwtgen.keys import StaticKeyProvider
    return StaticKeyProvider(*alt_keypair)
