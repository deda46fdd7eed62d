# catalog/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Optional, List
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from catalog.domain.models.product import Product
from catalog.domain.services.constants import PRODUCTS_COLLECTION


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a hex id; malformed ids resolve to nothing rather than raising."""
    return ObjectId(value) if ObjectId.is_valid(value) else None


class ProductRepo:
    """
    Product repository backed by the 'products' collection.
    Documents keep the storage-assigned ObjectId under `_id`.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = PRODUCTS_COLLECTION):
        self.col = db[collection_name]

    async def find(self, query: dict) -> List[Product]:
        """All products matching `query`, newest first."""
        cursor = self.col.find(query).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [Product.model_validate(d) for d in docs]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        oid = to_object_id(product_id)
        if oid is None:
            return None
        doc = await self.col.find_one({"_id": oid})
        return Product.model_validate(doc) if doc else None

    async def find_same_category(self, product: Product, limit: int) -> List[Product]:
        """Products sharing `product.category`, excluding `product` itself. Order is storage-defined."""
        cursor = self.col.find(
            {"category": product.category, "_id": {"$ne": ObjectId(product.id)}}
        ).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [Product.model_validate(d) for d in docs]

    async def insert(self, doc: dict) -> Product:
        res = await self.col.insert_one(doc)
        return Product.model_validate({**doc, "_id": res.inserted_id})

    async def update(self, product_id: str, changes: dict) -> Optional[Product]:
        """
        Partial `$set` merge. Returns the updated document, or None when the id
        does not resolve.
        """
        oid = to_object_id(product_id)
        if oid is None:
            return None
        doc = await self.col.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return Product.model_validate(doc) if doc else None

    async def delete(self, product_id: str) -> bool:
        oid = to_object_id(product_id)
        if oid is None:
            return False
        res = await self.col.delete_one({"_id": oid})
        return res.deleted_count == 1
