# catalog/api/v1/routers/promo.py
from fastapi import APIRouter, status

from catalog.api.deps import AdminDep, ContextDep
from catalog.domain.models.promo import PromoCode, PromoCreate, PromoDiscount

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/promo", tags=["promo"])


@router.get("/{code}", response_model=PromoDiscount)
async def get_promo(code: str, ctx: ContextDep):
    logger.info("Request: get_promo code=%s", code)
    return await ctx.promos.get_promo(code)


@router.post("", response_model=PromoCode, status_code=status.HTTP_201_CREATED, dependencies=[AdminDep])
async def create_promo(body: PromoCreate, ctx: ContextDep):
    return await ctx.promos.create_promo(body)
