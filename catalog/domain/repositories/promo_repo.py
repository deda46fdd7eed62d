# catalog/domain/repositories/promo_repo.py

from __future__ import annotations
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from catalog.core.errors import Conflict
from catalog.domain.models.promo import PromoCode
from catalog.domain.services.constants import PROMOS_COLLECTION


class PromoRepo:
    """
    Promo code repository backed by the 'promocodes' collection.
    Uniqueness of `code` is enforced by a unique index, see ensure_indexes().
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = PROMOS_COLLECTION):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        await self.col.create_index("code", unique=True)

    async def find_active(self, code: str) -> Optional[PromoCode]:
        doc = await self.col.find_one({"code": code, "active": True})
        return PromoCode.model_validate(doc) if doc else None

    async def insert(self, doc: dict) -> PromoCode:
        try:
            res = await self.col.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict(f"Promo code {doc.get('code')!r} already exists")
        return PromoCode.model_validate({**doc, "_id": res.inserted_id})
