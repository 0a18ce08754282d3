"""
Pipeline Canvas Backend - FastAPI
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import settings
from routers import (
    pipeline_graph_router,
    step_types_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Pipeline Canvas",
    version="1.0.0",
    description="Visual pipeline editor: spec <-> graph transforms and layout",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(pipeline_graph_router, prefix="/api")
app.include_router(step_types_router, prefix="/api")


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": "1.0.0"}
