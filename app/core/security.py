"""Password hashing for account passwords and anonymous post/comment secrets."""

import hmac
import secrets

import bcrypt

# Min/max lengths for account credentials and anonymous secrets (input validation).
USERNAME_MIN_LEN = 2
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
SECRET_MIN_LEN = 4
SECRET_MAX_LEN = 20

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    Salted bcrypt hash and verify with a configurable work factor.

    The same hasher serves account passwords and anonymous resource secrets;
    each digest is stored on its own record and only ever compared against
    input meant for that record.
    """

    def __init__(self, rounds: int) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """Verify a plain password against a stored hash (constant-time inside bcrypt)."""
        if not digest:
            return False
        pw_bytes = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, digest.encode("utf-8"))
        except (ValueError, TypeError):
            return False


def generate_activation_code(length: int) -> str:
    """Random numeric one-time code for email activation."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def codes_match(submitted: str, expected: str | None) -> bool:
    if not expected:
        return False
    return hmac.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))
