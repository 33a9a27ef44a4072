"""User-facing texts for the name reconciliation flow."""

DEFAULT_COMMAND = "confirmname"


def usage(command: str = DEFAULT_COMMAND) -> str:
    return f"/{command} <password>"


def mismatch_detected(account_name: str, display_name: str) -> str:
    return (
        f"Server detected that your account name ({account_name}) "
        f"differs from your player name ({display_name})."
    )


def how_to_confirm(command: str = DEFAULT_COMMAND) -> str:
    return f"To update your account name, use: {usage(command)}"


REMINDER = "Reminder: Your account name differs from your player name."


def reminder_how_to(command: str = DEFAULT_COMMAND) -> str:
    return f"Use: {usage(command)} to update your account name."


NOT_LOGGED_IN = "You must be logged in to use this command."
NO_PENDING_CHANGE = "You don't have any pending name changes."
INVALID_PASSWORD = "Invalid password!"


def usage_error(command: str = DEFAULT_COMMAND) -> str:
    return f"Usage: {usage(command)}"


def renamed(old_name: str, new_name: str) -> str:
    return f"Successfully updated account name from '{old_name}' to '{new_name}'!"
