import logging
from datetime import datetime
from typing import Callable

from catalog.core.errors import Expired, NotFound
from catalog.domain.models.common import as_utc, to_bson_millis, utcnow
from catalog.domain.models.promo import PromoCode, PromoCreate, PromoDiscount, normalize_code
from catalog.domain.repositories.promo_repo import PromoRepo

logger = logging.getLogger(__name__)


class PromoService:
    def __init__(self, repo: PromoRepo, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    async def get_promo(self, code: str) -> PromoDiscount:
        """
        Resolve an active promo code to its discount.
        Lookup is case-insensitive; only the discount is exposed.
        """
        normalized = normalize_code(code)
        promo = await self.repo.find_active(normalized) if normalized else None
        if promo is None:
            raise NotFound("Invalid promo code")
        if promo.expiresAt is not None and promo.expiresAt < self.clock():
            logger.debug("promo expired code=%s expiresAt=%s", normalized, promo.expiresAt.isoformat())
            raise Expired("Promo code expired")
        return PromoDiscount(discount=promo.discount)

    async def create_promo(self, body: PromoCreate) -> PromoCode:
        doc = body.model_dump()
        if doc.get("expiresAt") is not None:
            doc["expiresAt"] = to_bson_millis(as_utc(doc["expiresAt"]))
        promo = await self.repo.insert(doc)
        logger.info("promo created code=%s discount=%s", promo.code, promo.discount)
        return promo
