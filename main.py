"""FastAPI app entry point for the Marakatas combat engine."""

import logging
import random

from fastapi import FastAPI

from api.content import router as content_router
from api.sessions import router as sessions_router
from config import LOG_LEVEL, rng_seed
from engine.catalog import load_catalog

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Marakatas Combat Engine",
    description="Turn-based combat rules engine for The Marakatas",
    version="0.1.0",
)

app.state.catalog = load_catalog()
app.state.rng = random.Random(rng_seed())
app.state.sessions = {}

app.include_router(content_router, tags=["Content"])
app.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning engine info."""
    return {"name": "Marakatas Combat Engine", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
