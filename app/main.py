from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import get_settings
from app.core.errors import ShopRecoError
from app.core.lifespan import lifespan
from app.core.logging import configure_logging
from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.interactions import router as interactions_router
from app.api.v1.routers.recommendations import router as recommendations_router
from app.api.v1.routers.personalized import router as personalized_router

import logging

settings = get_settings()
configure_logging(debug=settings.DEBUG)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,https://www.shop.example.com"
allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["http://localhost:5173"],  # vite dev server
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(ShopRecoError)
async def shopreco_error_handler(request: Request, exc: ShopRecoError):
    logger.warning(
        "request failed path=%s status=%s error=%s", request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )

# ------- Routes -------
app.include_router(health_router)
app.include_router(interactions_router, prefix=settings.api_prefix)       # tracking (write path)
app.include_router(recommendations_router, prefix=settings.api_prefix)    # content / collaborative / hybrid + bought together
app.include_router(personalized_router, prefix=settings.api_prefix)       # personalized home
