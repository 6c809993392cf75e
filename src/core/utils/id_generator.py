"""Short, URL-safe random identifiers.

The same generator produces public image ids and delete tokens. Ids are
drawn from an alphabet without visually confusable characters so they can be
read back and typed by hand.
"""

import secrets

from core.utils.constants import ID_ALPHABET, ID_LENGTH


def generate_id(length: int = ID_LENGTH) -> str:
    """Return a random identifier drawn uniformly from ``ID_ALPHABET``."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def generate_image_id() -> str:
    """Generate a public image identifier."""
    return generate_id()


def generate_delete_token() -> str:
    """Generate a delete token (an independent draw, never derived from an id)."""
    return generate_id()
