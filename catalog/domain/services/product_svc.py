import logging
import time
from datetime import datetime
from typing import Callable, List

from catalog.core.errors import NotFound
from catalog.domain.models.common import to_bson_millis, utcnow
from catalog.domain.models.product import DeleteResult, Product, ProductCreate, ProductUpdate
from catalog.domain.repositories.product_repo import ProductRepo
from catalog.domain.services.constants import SIMILAR_LIMIT
from catalog.domain.services.filters import ProductFilter, build_product_query

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class ProductService:
    """
    Product queries and admin mutations.
    Admin gating happens before any of these methods is reached.
    """

    def __init__(self, repo: ProductRepo, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    async def list_products(self, f: ProductFilter) -> List[Product]:
        query = build_product_query(f)
        t0 = time.perf_counter()
        items = await self.repo.find(query)
        logger.debug("list_products query=%s items=%s db_time=%.3fs", query, len(items), time.perf_counter() - t0)
        return items

    async def get_product(self, product_id: str) -> Product:
        product = await self.repo.get_by_id(product_id)
        if product is None:
            raise NotFound(PRODUCT_NOT_FOUND)
        return product

    async def get_similar_products(self, product_id: str) -> List[Product]:
        # A missing reference must not degrade into an unconstrained category match
        ref = await self.get_product(product_id)
        items = await self.repo.find_same_category(ref, limit=SIMILAR_LIMIT)
        logger.debug("similar product_id=%s category=%s items=%s", product_id, ref.category, len(items))
        return items

    async def create_product(self, body: ProductCreate) -> Product:
        doc = body.model_dump()
        doc["createdAt"] = to_bson_millis(self.clock())
        product = await self.repo.insert(doc)
        logger.info("product created id=%s category=%s", product.id, product.category)
        return product

    async def update_product(self, product_id: str, body: ProductUpdate) -> Product:
        changes = body.changes()
        if not changes:
            return await self.get_product(product_id)
        product = await self.repo.update(product_id, changes)
        if product is None:
            raise NotFound(PRODUCT_NOT_FOUND)
        logger.info("product updated id=%s fields=%s", product_id, sorted(changes))
        return product

    async def delete_product(self, product_id: str) -> DeleteResult:
        if not await self.repo.delete(product_id):
            raise NotFound(PRODUCT_NOT_FOUND)
        logger.info("product deleted id=%s", product_id)
        return DeleteResult(message="Product deleted")
