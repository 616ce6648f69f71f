"""Identifier generation for phases, columns and blocks."""

import secrets
import string

ALPHABET = string.ascii_letters + string.digits + "_-"
ID_SIZE = 21


def new_id(size: int = ID_SIZE) -> str:
    """Return a random URL-safe identifier.

    21 characters from a 64-symbol alphabet, the same shape nanoid uses.
    """
    return "".join(secrets.choice(ALPHABET) for _ in range(size))


def unique_id(existing) -> str:
    """Return a fresh id not present in existing.

    Collisions are astronomically unlikely; the loop makes reuse impossible.
    """
    taken = set(existing)
    while True:
        candidate = new_id()
        if candidate not in taken:
            return candidate
