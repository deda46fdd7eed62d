from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError
from catalog.core.config import get_settings
from catalog.core.errors import CatalogError
from catalog.core.lifespan import lifespan
from catalog.api.v1.routers.products import router as products_router
from catalog.api.v1.routers.promo import router as promo_router
from catalog.api.v1.routers.upload import router as upload_router
from catalog.api.v1.routers.health import router as health_router
from catalog.core.logging import configure_logging

import logging, os

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV list; when unset any origin is accepted.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["*"],
    allow_credentials=False,                        # "*" + credentials is forbidden
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],                            # admin "password" header included
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})

@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError):
    logger.exception("storage failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router, prefix=settings.api_prefix)
app.include_router(promo_router, prefix=settings.api_prefix)
app.include_router(upload_router, prefix=settings.api_prefix)

# Previously stored assets; the directory itself is managed outside the app
if os.path.isdir(settings.UPLOADS_DIR):
    app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")
