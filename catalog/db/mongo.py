# catalog/db/mongo.py
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from catalog.core.config import Settings
import certifi
import logging

logger = logging.getLogger(__name__)


def _wants_tls(uri: str) -> bool:
    u = uri.lower()
    return u.startswith("mongodb+srv://") or "tls=true" in u or "ssl=true" in u


def _new_client(settings: Settings) -> AsyncIOMotorClient:
    kwargs = dict(
        tz_aware=True,
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
        connectTimeoutMS=settings.MONGO_TIMEOUT_MS,
    )
    if _wants_tls(settings.MONGO_URI):
        kwargs.update(tls=True, tlsCAFile=certifi.where())  # CA bundle for Atlas/containers
    return AsyncIOMotorClient(settings.MONGO_URI, **kwargs)


async def connect(settings: Settings) -> tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """
    Create the Motor client and select the catalog database.
    A failed startup ping is only logged: Motor connects lazily, so the
    first real query retries once the server is reachable.
    """
    client = _new_client(settings)
    db = client[settings.MONGO_DB]
    try:
        await client.admin.command("ping")
        logger.info("Mongo connected (ping ok) db=%s", settings.MONGO_DB)
    except Exception as e:
        logger.warning("Mongo ping at startup failed, will connect lazily: %s", e)
    return client, db


async def disconnect(client: AsyncIOMotorClient | None) -> None:
    if client:
        client.close()
        logger.info("Mongo disconnected")
