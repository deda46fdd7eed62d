# catalog/core/context.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from catalog.clients.cloudinary import MediaUploader
from catalog.core.security import AdminGuard, StaticSecretVerifier, CredentialVerifier
from catalog.domain.models.common import utcnow
from catalog.domain.repositories.product_repo import ProductRepo
from catalog.domain.repositories.promo_repo import PromoRepo
from catalog.domain.services.product_svc import ProductService
from catalog.domain.services.promo_svc import PromoService
from catalog.domain.services.upload_svc import UploadService


@dataclass
class CatalogContext:
    """
    Process-scoped handles for one running catalog: storage, media host,
    admin guard and the services built on top of them.
    Built once in the lifespan and injected into routes.
    """
    db: Any
    guard: AdminGuard
    media: MediaUploader
    products: ProductService
    promos: PromoService
    uploads: UploadService
    client: Optional[Any] = field(default=None, repr=False)  # Mongo client, when owned


def build_context(
    db,
    *,
    media: MediaUploader,
    verifier: CredentialVerifier | None = None,
    admin_secret: str = "",
    clock: Callable[[], datetime] = utcnow,
    client=None,
) -> CatalogContext:
    return CatalogContext(
        db=db,
        guard=AdminGuard(verifier or StaticSecretVerifier(admin_secret)),
        media=media,
        products=ProductService(ProductRepo(db), clock=clock),
        promos=PromoService(PromoRepo(db), clock=clock),
        uploads=UploadService(media),
        client=client,
    )
