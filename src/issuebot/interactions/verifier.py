"""Ed25519 signature verification for Discord interactions.

Discord signs every interaction request with the application's private key.
The signature covers the ``X-Signature-Timestamp`` header value followed by
the raw request body, and is sent hex-encoded in ``X-Signature-Ed25519``.

Verification must run against the body bytes exactly as received, before
any JSON parsing. Requests that fail verification are rejected with 401 and
never reach the router.
"""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


class InteractionVerifier:
    """Verifies interaction signatures against the application public key.

    Attributes:
        public_key: The Ed25519 public key loaded from its hex form.
    """

    def __init__(self, public_key_hex: str) -> None:
        """Load the application public key.

        Args:
            public_key_hex: 64 character hex public key from the Developer
                            Portal.

        Raises:
            ValueError: If the key is not valid hex or not 32 bytes long.
        """
        self.public_key = Ed25519PublicKey.from_public_bytes(
            bytes.fromhex(public_key_hex)
        )

    def verify(self, body: bytes, signature: str, timestamp: str) -> bool:
        """Check a request signature.

        Args:
            body: The raw, unparsed request body.
            signature: Hex signature from the signature header.
            timestamp: Value of the timestamp header.

        Returns:
            True if the signature is valid for timestamp + body.
        """
        if not signature or not timestamp:
            logger.debug("Missing signature or timestamp header")
            return False

        try:
            signature_bytes = bytes.fromhex(signature)
        except ValueError:
            logger.debug("Signature header is not valid hex")
            return False

        try:
            self.public_key.verify(signature_bytes, timestamp.encode("utf-8") + body)
        except InvalidSignature:
            return False
        return True
