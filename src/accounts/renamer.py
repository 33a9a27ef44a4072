"""Collision-checked account renames."""

from dataclasses import dataclass

import structlog

from .store import DuplicateAccountError

logger = structlog.get_logger()

NAME_TAKEN_MESSAGE = "An account with that name already exists!"


@dataclass(frozen=True)
class RenameResult:
    ok: bool
    error: str = ""
    name_taken: bool = False


class AccountRenamer:
    """Renames an account unless a different account already owns the name."""

    def __init__(self, store):
        self.store = store

    def rename(self, account_id: int, new_name: str) -> RenameResult:
        try:
            existing = self.store.get_by_name(new_name)
            if existing is not None and existing.id != account_id:
                logger.info(
                    "renamer.name_taken",
                    account_id=account_id,
                    new_name=new_name,
                    owner_id=existing.id,
                )
                return RenameResult(ok=False, error=NAME_TAKEN_MESSAGE, name_taken=True)

            self.store.rename(account_id, new_name)
            return RenameResult(ok=True)
        except DuplicateAccountError:
            # lost a race with another writer between the check and the update
            return RenameResult(ok=False, error=NAME_TAKEN_MESSAGE, name_taken=True)
        except Exception as e:
            logger.error("renamer.update_failed", account_id=account_id, new_name=new_name, error=repr(e))
            return RenameResult(ok=False, error=f"Failed to update account: {e}")
