"""FastAPI application and app configuration for the helpdesk backend.

This module creates the FastAPI `app`, configures middleware (CORS), the
slowapi limiter and the error envelope, mounts the public and protected route
groups under `/routes` and initializes the DB on startup
(calls `helpdesk.database.init_db`).
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import List

from dotenv import load_dotenv

load_dotenv()

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.auth import require_identity
from helpdesk.database import init_db
from helpdesk.errors import install_exception_handlers
from helpdesk.limits import limiter
from helpdesk.routers import private, public

logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

API_PREFIX = "/routes"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: initializing database")
    init_db()
    yield
    logger.info("Lifespan shutdown")


app = FastAPI(title="Helpdesk Backend", version="1.0.0", lifespan=lifespan)
app.state.limiter = limiter
install_exception_handlers(app)

# CORS (developer friendly defaults)
origins = os.getenv("CORS_ORIGINS", "*")
if origins == "*":
    allowed_origins: List[str] = ["*"]
else:
    # comma separated list
    allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health() -> dict:
    return {"status": "ok"}


app.include_router(public.router, prefix=API_PREFIX)
app.include_router(private.router, prefix=API_PREFIX, dependencies=[Depends(require_identity)])
logger.info("Mounted public and protected routers under %s", API_PREFIX)


__all__ = ["app", "API_PREFIX"]
