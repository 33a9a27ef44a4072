"""Password hashing and verification against the account table."""

import bcrypt
import structlog

logger = structlog.get_logger()

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a bcrypt hash for `password` as text."""
    salt = bcrypt.gensalt(rounds=rounds or DEFAULT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


class CredentialVerifier:
    """Checks a candidate password against the stored hash for an account name."""

    def __init__(self, store):
        self.store = store

    def verify(self, account_name: str, password: str) -> bool:
        """True only if the account exists and the password matches.

        Lookup misses, bad stored hashes and store errors all return False so
        callers cannot tell the failure modes apart.
        """
        try:
            account = self.store.get_by_name(account_name)
            if account is None:
                logger.info("credentials.account_missing", account_name=account_name)
                return False
            return bcrypt.checkpw(password.encode("utf-8"), account.password_hash.encode("utf-8"))
        except Exception as e:
            logger.warning("credentials.verify_failed", account_name=account_name, error=str(e))
            return False
