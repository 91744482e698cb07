"""
Password hashing for staff sign-in
"""

import hashlib
import hmac
import secrets

from viandas.infrastructure.utilities.constants import PasswordHashing


def hash_password(password: str, iterations: int = PasswordHashing.ITERATIONS) -> str:
    """Hash a password as ``pbkdf2_sha256$<iterations>$<salt>$<digest>``"""
    salt = secrets.token_hex(PasswordHashing.SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(
        PasswordHashing.ALGORITHM, password.encode("utf-8"), bytes.fromhex(salt), iterations
    )
    return f"{PasswordHashing.SCHEME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match"""
    try:
        scheme, iterations, salt, expected = encoded.split("$")
        if scheme != PasswordHashing.SCHEME:
            return False
        digest = hashlib.pbkdf2_hmac(
            PasswordHashing.ALGORITHM,
            password.encode("utf-8"),
            bytes.fromhex(salt),
            int(iterations),
        )
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(digest.hex(), expected)
