"""Key derivation for stored content."""

import base64
import hashlib
import re

# Keys are the trailing characters of the cleaned digest
KEY_LENGTH = 8

# Same character class as [\W_]: anything outside [A-Za-z0-9]
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def derive_key(content: bytes | str) -> str:
    """Derive the short lookup key for ``content``.

    The SHA-256 digest of the content is base64 encoded, stripped of every
    non-alphanumeric character, and clipped to its last ``KEY_LENGTH``
    characters. Text is hashed as UTF-8.

    Truncation weakens collision resistance; two different contents sharing
    a key will overwrite each other in the store.

    Args:
        content: Raw bytes or text to address

    Returns:
        Key of at most ``KEY_LENGTH`` characters
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    digest = hashlib.sha256(content).digest()
    encoded = base64.b64encode(digest).decode("ascii")
    return _NON_ALNUM.sub("", encoded)[-KEY_LENGTH:]
