"""The `confirmname` command: password-gated account rename."""

import dataclasses
from typing import Optional

import structlog

from accounts.credentials import CredentialVerifier
from accounts.renamer import AccountRenamer
from observability import Metrics
from shared_types import ConfirmOutcome

from . import messages
from .tracker import ReconciliationTracker

logger = structlog.get_logger()


class ConfirmNameCommand:
    """Renames the caller's account to their display name after a password check.

    Every outcome is reported to the session; nothing is raised to the host.
    The tracker lock is held from the pending check to the clear so a
    reminder cannot interleave with a successful rename.
    """

    def __init__(
        self,
        tracker: ReconciliationTracker,
        verifier: CredentialVerifier,
        renamer: AccountRenamer,
        command_name: str = messages.DEFAULT_COMMAND,
        metrics: Optional[Metrics] = None,
        accounts=None,
    ):
        self.tracker = tracker
        self.verifier = verifier
        self.renamer = renamer
        self.accounts = accounts
        self.command_name = command_name
        self.metrics = metrics or Metrics()

    def __call__(self, args) -> ConfirmOutcome:
        return self.confirm(args.session, args.parameters)

    def confirm(self, session, parameters: list[str]) -> ConfirmOutcome:
        outcome = self._confirm(session, parameters)
        self.metrics.counter(f"confirm.{outcome}")
        return outcome

    def _current_account(self, session):
        """Re-read the bound account by id; another session may have renamed it."""
        account = session.account
        if self.accounts is None:
            return account
        try:
            current = self.accounts.get_by_id(account.id)
        except Exception as e:
            logger.warning("confirm.account_reload_failed", account_id=account.id, error=repr(e))
            return account
        if current is None:
            return account
        session.account = current
        return current

    def _confirm(self, session, parameters: list[str]) -> ConfirmOutcome:
        account = session.account
        if account is None:
            session.send_error(messages.NOT_LOGGED_IN)
            return ConfirmOutcome.NOT_LOGGED_IN
        account = self._current_account(session)

        new_name = session.display_name
        with self.tracker.guard():
            if not self.tracker.is_pending(new_name):
                session.send_error(messages.NO_PENDING_CHANGE)
                return ConfirmOutcome.NOT_PENDING

            if len(parameters) != 1:
                session.send_error(messages.usage_error(self.command_name))
                return ConfirmOutcome.USAGE

            old_name = account.name
            with self.metrics.timer("confirm.verify"):
                verified = self.verifier.verify(old_name, parameters[0])
            if not verified:
                logger.info("confirm.invalid_password", account_id=account.id, display_name=new_name)
                session.send_error(messages.INVALID_PASSWORD)
                return ConfirmOutcome.INVALID_PASSWORD

            with self.metrics.timer("confirm.rename"):
                result = self.renamer.rename(account.id, new_name)
            if not result.ok:
                session.send_error(result.error)
                if result.name_taken:
                    return ConfirmOutcome.NAME_TAKEN
                return ConfirmOutcome.STORE_FAILED

            self.tracker.clear(new_name)
            session.account = dataclasses.replace(account, name=new_name)

        logger.info("confirm.renamed", account_id=account.id, old_name=old_name, new_name=new_name)
        session.send_success(messages.renamed(old_name, new_name))
        return ConfirmOutcome.RENAMED
