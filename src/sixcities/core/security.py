"""Password hashing helpers."""

import hashlib
import hmac


def create_sha256(line: str, salt: str) -> str:
    """Hash ``line`` with ``salt`` using HMAC-SHA256.

    Args:
        line: Plaintext to hash
        salt: Secret salt, used as the HMAC key

    Returns:
        64-character lowercase hex digest
    """
    return hmac.new(
        salt.encode("utf-8"), line.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def digests_match(expected: str, actual: str) -> bool:
    """Compare two digests in constant time."""
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
