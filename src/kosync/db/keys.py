"""Store key scheme.

Callers must validate components with is_valid_key_field first; the
scheme is only injective for separator-free components.
"""

from kosync.utils.validators import KEY_SEPARATOR


def account_key(username: str) -> str:
    """Key holding the account secret: user:<username>:key."""
    return KEY_SEPARATOR.join(("user", username, "key"))


def progress_key(username: str, document: str) -> str:
    """Key holding the progress hash: user:<username>:document:<document>."""
    return KEY_SEPARATOR.join(("user", username, "document", document))
