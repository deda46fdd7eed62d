# catalog/core/lifespan.py
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from catalog.clients.cloudinary import CloudinaryUploader
from catalog.core.config import get_settings
from catalog.core.context import build_context
from catalog.db import mongo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    client, db = await mongo.connect(settings)
    media = CloudinaryUploader.from_settings(settings)
    if not settings.cloudinary_configured:
        logger.warning("Cloudinary credentials missing: /api/upload will fail")

    ctx = build_context(db, media=media, admin_secret=settings.ADMIN_PASSWORD, client=client)
    # Promo code uniqueness relies on this index: no index, no startup
    try:
        await ctx.promos.repo.ensure_indexes()
    except Exception as e:
        logger.error("Could not ensure promo code index: %s", e)
        await ctx.media.aclose()
        await mongo.disconnect(ctx.client)
        raise
    app.state.catalog = ctx
    logger.info("%s started env=%s", settings.APP_NAME, settings.APP_ENV)

    # Application runs
    yield

    # --- Shutdown ---
    await ctx.media.aclose()
    await mongo.disconnect(ctx.client)
