"""Account table, credential checks and renames."""

from .credentials import CredentialVerifier, hash_password
from .models import Account
from .renamer import AccountRenamer, RenameResult
from .store import AccountStore, AccountStoreError, DuplicateAccountError

__all__ = [
    "Account",
    "AccountStore",
    "AccountStoreError",
    "DuplicateAccountError",
    "CredentialVerifier",
    "hash_password",
    "AccountRenamer",
    "RenameResult",
]
