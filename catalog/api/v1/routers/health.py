# catalog/api/v1/routers/health.py
import time
import subprocess
from functools import lru_cache
from fastapi import APIRouter
from catalog.api.deps import ContextDep
from catalog.core.config import get_settings

router = APIRouter(tags=["health"])
START_TIME = time.time()


# Resolved once per process: the checkout does not change while serving
@lru_cache
def _git_sha(short: bool = True) -> str:
    try:
        cmd = ["git", "rev-parse", "--short" if short else "HEAD"]
        return subprocess.check_output(cmd, stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


@router.get("/")
async def root():
    return {"message": "Kaly catalog API is running"}


@router.get("/health")
async def health(ctx: ContextDep):
    """
    Tolerant health check:
    - ping Mongo via Motor (async)
    - report whether the image host and admin secret are configured
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "version": settings.GIT_SHA if settings.GIT_SHA != "unknown" else _git_sha(),
        "uptime_seconds": int(time.time() - START_TIME),
    }

    # --- Mongo ---
    try:
        await ctx.db.command("ping")
        checks["mongodb"] = "ok"
    except Exception as e:
        checks["mongodb"] = f"error: {type(e).__name__}"

    checks["cloudinary_configured"] = settings.cloudinary_configured
    checks["admin_password_set"] = bool(settings.ADMIN_PASSWORD)

    # Only the storage check decides the global status
    status = "ok" if checks["mongodb"] == "ok" else "error"
    return {"status": status, "checks": checks, "timestamp": int(time.time())}
