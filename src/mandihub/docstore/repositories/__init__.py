"""
mandihub.docstore.repositories

Document store implementations of the catalog store protocols.

Responsibilities:
- Keep BSON details (ObjectId, Decimal128, positional updates) inside this package.
- Report matched/modified counts so the synchronizer can check its assumptions.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pymongo.errors import DuplicateKeyError

from mandihub.errors import ValidationFailed


@contextmanager
def unique_violation_as(message: str) -> Iterator[None]:
    # The unique indexes from `docstore.client.ensure_indexes` back up the service's read check.
    try:
        yield
    except DuplicateKeyError as exc:
        raise ValidationFailed(message) from exc
