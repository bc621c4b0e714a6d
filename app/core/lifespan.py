# app/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.db import mongo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    # connect() never raises on an unreachable server: the client stays lazy
    # and read endpoints degrade to empty results until Mongo answers.
    await mongo.connect()
    logger.info("startup complete app=%s", app.title)

    # Application runs
    yield

    # --- Shutdown ---
    await mongo.disconnect()
    logger.info("shutdown complete")
