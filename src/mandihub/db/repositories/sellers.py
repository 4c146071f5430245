from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.db.models import Profile, Seller
from mandihub.db.repositories import as_pk, commit_unique
from mandihub.schemas import EntityId, ProfileData, SellerRecord


def seller_record(seller: Seller) -> SellerRecord:
    p = seller.profile
    return SellerRecord(
        id=seller.id,
        account_id=seller.account_id,
        profile=ProfileData(
            first_name=p.first_name,
            last_name=p.last_name,
            website=p.website,
            birthday=p.birthday,
            address=p.address,
            email_address=p.email_address,
            gender=p.gender,
        ),
    )


class SqlSellerRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, seller_id: EntityId) -> SellerRecord | None:
        pk = as_pk(seller_id)
        if pk is None:
            return None
        seller = await self._session.get(Seller, pk, populate_existing=True)
        return seller_record(seller) if seller is not None else None

    async def find_by_account_id(self, account_id: str) -> SellerRecord | None:
        stmt = select(Seller).where(Seller.account_id == account_id)
        seller = (await self._session.execute(stmt)).scalar_one_or_none()
        return seller_record(seller) if seller is not None else None

    async def find_by_first_name(self, first_name: str) -> list[SellerRecord]:
        stmt = (
            select(Seller)
            .join(Seller.profile)
            .where(Profile.first_name == first_name)
            .order_by(Seller.id)
            .execution_options(populate_existing=True)
        )
        return [seller_record(s) for s in (await self._session.execute(stmt)).scalars().all()]

    async def get_all(self) -> list[SellerRecord]:
        stmt = select(Seller).order_by(Seller.id).execution_options(populate_existing=True)
        return [seller_record(s) for s in (await self._session.execute(stmt)).scalars().all()]

    async def save(self, *, account_id: str, profile: ProfileData) -> SellerRecord:
        seller = Seller(account_id=account_id, profile=Profile(**profile.model_dump()))
        self._session.add(seller)
        await commit_unique(
            self._session, f"A seller with account id {account_id!r} already exists"
        )
        return seller_record(seller)

    async def update_fields(self, seller_id: EntityId, fields: Mapping[str, Any]) -> int:
        pk = as_pk(seller_id)
        seller = await self._session.get(Seller, pk) if pk is not None else None
        if seller is None:
            return 0
        for key, value in fields.items():
            if key == "profile":
                for attr, attr_value in value.model_dump().items():
                    setattr(seller.profile, attr, attr_value)
            else:
                setattr(seller, key, value)
        await commit_unique(self._session, "A seller with this account id already exists")
        return 1

    async def delete_all(self) -> None:
        # Profiles are owned 1:1 by sellers and go with them.
        await self._session.execute(delete(Seller))
        await self._session.execute(delete(Profile))
        await self._session.commit()
        self._session.expunge_all()

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Seller)
        return int((await self._session.execute(stmt)).scalar_one())
