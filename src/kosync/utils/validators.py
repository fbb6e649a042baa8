"""Field validation helpers.

Key conventions:
- Store keys are built from segments joined by KEY_SEPARATOR
  ("user:<username>:key", "user:<username>:document:<document>")
- Any value embedded in a key (username, document) is a "key field" and
  must not contain the separator, otherwise it could alias another
  user's keys.

Functions:
- is_valid_field(value) -> bool: Generic non-empty check
- is_valid_key_field(value) -> bool: Non-empty and separator-free
"""

KEY_SEPARATOR = ":"


def is_valid_field(value: str) -> bool:
    """Check that a free-text field (secret, progress, device) is non-empty."""
    return bool(value)


def is_valid_key_field(value: str) -> bool:
    """Check that a value can be safely embedded into a store key.

    Args:
        value: Candidate username or document identifier

    Returns:
        True if the value is non-empty and contains no KEY_SEPARATOR
    """
    return is_valid_field(value) and KEY_SEPARATOR not in value
