"""Secrets for pairing codes and device tokens.

Raw values leave the process exactly once; only their SHA-256 digests are
stored and compared.
"""

import hashlib
import secrets

TOKEN_BYTES = 32


def mint_secret() -> str:
    """256 bits of randomness, hex encoded."""
    return secrets.token_hex(TOKEN_BYTES)


def hash_token(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
