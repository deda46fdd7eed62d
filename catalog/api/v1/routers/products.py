# catalog/api/v1/routers/products.py

from fastapi import APIRouter, Query, status
from typing import List, Optional
import time

from catalog.api.deps import AdminDep, ContextDep
from catalog.domain.models.product import DeleteResult, Product, ProductCreate, ProductUpdate
from catalog.domain.services.filters import ProductFilter

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[Product])
async def list_products(
    ctx: ContextDep,
    category: Optional[str] = Query(None, description="Exact category, or 'all'"),
    search: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    featured: Optional[str] = Query(None, description="true/false; omit for no constraint"),
):
    """
    All products matching the filters, newest first. No pagination.
    """
    logger.info("Request: list_products category=%s search=%s featured=%s", category, search, featured)
    t0 = time.perf_counter()
    f = ProductFilter.from_query(category, search, featured)
    items = await ctx.products.list_products(f)
    logger.info("Response: list_products count=%s elapsed_time=%.4fs", len(items), time.perf_counter() - t0)
    return items


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, ctx: ContextDep):
    return await ctx.products.get_product(product_id)


@router.get("/{product_id}/similar", response_model=List[Product])
async def similar_products(product_id: str, ctx: ContextDep):
    """
    Up to 6 products from the same category, the reference excluded.
    """
    logger.info("Request: similar_products product_id=%s", product_id)
    t0 = time.perf_counter()
    items = await ctx.products.get_similar_products(product_id)
    logger.info(
        "Response: similar_products product_id=%s, count=%s, elapsed_time=%.4fs",
        product_id, len(items), time.perf_counter() - t0,
    )
    return items


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED, dependencies=[AdminDep])
async def create_product(body: ProductCreate, ctx: ContextDep):
    return await ctx.products.create_product(body)


@router.put("/{product_id}", response_model=Product, dependencies=[AdminDep])
async def update_product(product_id: str, body: ProductUpdate, ctx: ContextDep):
    return await ctx.products.update_product(product_id, body)


@router.delete("/{product_id}", response_model=DeleteResult, dependencies=[AdminDep])
async def delete_product(product_id: str, ctx: ContextDep):
    return await ctx.products.delete_product(product_id)
