"""Identifier generation for new records."""

import itertools
import secrets
import string
from collections.abc import Callable

IdGenerator = Callable[[], str]

# URL-safe alphabet, same as nanoid
ID_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_ID_LENGTH = 21


def random_id(size: int = DEFAULT_ID_LENGTH) -> str:
    """Return a random URL-safe identifier of ``size`` characters."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def random_ids(size: int = DEFAULT_ID_LENGTH) -> IdGenerator:
    """Build a generator of random identifiers."""

    def generate() -> str:
        return random_id(size)

    return generate


def sequential_ids(prefix: str = "") -> IdGenerator:
    """Build a generator yielding ``prefix1``, ``prefix2``, ...

    Predictable ids for fixtures and demos.
    """
    counter = itertools.count(1)

    def generate() -> str:
        return f"{prefix}{next(counter)}"

    return generate
