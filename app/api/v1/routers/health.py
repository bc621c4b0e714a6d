# app/api/v1/routers/health.py
import time
import subprocess
import logging
from fastapi import APIRouter
from app.core.config import get_settings
from app.core.errors import StoreUnavailable
from app.db import mongo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])
START_TIME = time.time()


def _git_sha(short: bool = True) -> str:
    try:
        cmd = ["git", "rev-parse", "--short" if short else "HEAD"]
        return subprocess.check_output(cmd, stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


@router.get("/health")
async def health():
    """
    Liveness + Mongo reachability.
    Recommendation reads degrade to empty lists when Mongo is down, so a
    failing check here is the place where that outage becomes visible.
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "version": settings.GIT_SHA if settings.GIT_SHA != "unknown" else _git_sha(),
        "uptime_seconds": int(time.time() - START_TIME),
    }

    try:
        db = mongo.get_db()
        await db.command("ping")
        checks["mongodb"] = "ok"
    except StoreUnavailable:
        checks["mongodb"] = "not initialized"
    except Exception as e:  # any driver/network failure is reported, not raised
        logger.warning("health mongo ping failed: %s", e)
        checks["mongodb"] = f"error: {e}"

    status = "ok" if checks["mongodb"] == "ok" else "error"
    return {"status": status, "checks": checks, "timestamp": int(time.time())}
