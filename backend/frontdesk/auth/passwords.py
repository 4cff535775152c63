"""Staff password hashing with bcrypt."""

import bcrypt

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes of the secret.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Return the bcrypt hash of ``password`` as text for the users table."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True when ``plain_password`` matches the stored bcrypt hash."""
    if len(plain_password.encode("utf-8")) > _BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def password_problem(password: str) -> str | None:
    """Describe why ``password`` is unacceptable, or ``None`` when it is fine."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if len(password.encode("utf-8")) > _BCRYPT_MAX_BYTES:
        return f"Password must be at most {_BCRYPT_MAX_BYTES} bytes"
    return None
