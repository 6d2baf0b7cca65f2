"""PKCE (Proof Key for Code Exchange) utilities for OAuth 2.0."""

import base64
import hashlib
import secrets

STATE_BYTES = 24
VERIFIER_BYTES = 48


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def random_token(byte_length: int = 64) -> str:
    """Generate a random URL-safe token.

    Args:
        byte_length: Number of random bytes before encoding.

    Returns:
        Unpadded base64url encoding of the random bytes.
    """
    return _b64url(secrets.token_bytes(byte_length))


def challenge_from_verifier(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier.

    Challenge is base64url(SHA256(verifier)) per RFC 7636.
    """
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return _b64url(digest)


def generate_pkce() -> tuple[str, str]:
    """Generate PKCE code verifier and challenge.

    Returns:
        Tuple of (code_verifier, code_challenge).
    """
    # 48 bytes -> 64 chars, inside the 43-128 range RFC 7636 allows
    verifier = random_token(VERIFIER_BYTES)
    return verifier, challenge_from_verifier(verifier)


def generate_state() -> str:
    """Generate a random state parameter for CSRF protection."""
    return random_token(STATE_BYTES)
