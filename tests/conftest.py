"""Pytest configuration for all tests."""

from typing import Callable, Dict

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from src.issuebot.config import BotSettings
from src.issuebot.interactions.verifier import SIGNATURE_HEADER, TIMESTAMP_HEADER


@pytest.fixture
def signing_key() -> Ed25519PrivateKey:
    """A fresh Ed25519 key standing in for the Discord application key."""
    return Ed25519PrivateKey.generate()


@pytest.fixture
def public_key_hex(signing_key: Ed25519PrivateKey) -> str:
    return signing_key.public_key().public_bytes(
        encoding=Encoding.Raw, format=PublicFormat.Raw
    ).hex()


@pytest.fixture
def sign(signing_key: Ed25519PrivateKey) -> Callable[..., Dict[str, str]]:
    """Return a function producing signed request headers for a body."""

    def _sign(body: bytes, timestamp: str = "1700000000") -> Dict[str, str]:
        signature = signing_key.sign(timestamp.encode("utf-8") + body)
        return {
            SIGNATURE_HEADER: signature.hex(),
            TIMESTAMP_HEADER: timestamp,
            "Content-Type": "application/json",
        }

    return _sign


@pytest.fixture
def settings(public_key_hex: str) -> BotSettings:
    return BotSettings(
        _env_file=None,
        discord_token="discord-test-token",
        discord_public_key=public_key_hex,
        github_token="ghp_test_token",
        github_repo="acme/widgets",
    )
