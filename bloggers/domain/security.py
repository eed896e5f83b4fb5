"""Password hashing helpers (bcrypt)."""

import bcrypt


def hash_password(password: str, rounds: int = 10) -> tuple[str, str]:
    """
    Hash password using bcrypt.

    Returns:
        Tuple of (salt, hash). The salt is kept alongside the hash on the
        account record.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    password_hash = bcrypt.hashpw(password.encode(), salt)
    return salt.decode(), password_hash.decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time bcrypt comparison."""
    return bcrypt.checkpw(password.encode(), password_hash.encode())
