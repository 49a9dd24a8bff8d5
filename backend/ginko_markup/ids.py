"""Sources of fresh identifiers for generated records."""
from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdSource = Callable[[], str]

DEFAULT_ID_LENGTH = 8


def generate_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """Return a random token of ``length`` hex characters starting with a letter."""

    while True:
        token = uuid.uuid4().hex
        start = next((index for index, char in enumerate(token) if char.isalpha()), None)
        if start is not None and len(token) - start >= length:
            return token[start : start + length]


def random_ids(length: int = DEFAULT_ID_LENGTH) -> IdSource:
    return lambda: generate_id(length)


class SequentialIdSource:
    """Deterministic ids (``prefix1``, ``prefix2``, ...) for reproducible output."""

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


__all__ = ["DEFAULT_ID_LENGTH", "IdSource", "SequentialIdSource", "generate_id", "random_ids"]
