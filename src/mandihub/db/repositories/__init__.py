"""
mandihub.db.repositories

Relational implementations of the catalog store protocols.

Responsibilities:
- Translate ORM rows into backend-neutral records (`mandihub.schemas`).
- Commit each write so it is durable before the caller moves on.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.errors import ValidationFailed


def as_pk(value: Any) -> int | None:
    # Malformed ids behave like unknown ids.
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


async def commit_unique(session: AsyncSession, message: str) -> None:
    # A unique constraint can still trip when two requests pass the service's read check.
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValidationFailed(message) from exc
