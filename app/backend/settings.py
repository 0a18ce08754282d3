"""
Backend settings.

Values come from the environment (optionally a .env file at the repo root).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

repo_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(repo_root / ".env")

# Layout geometry (uniform node footprint, in canvas units)
NODE_WIDTH = float(os.getenv("PIPELINE_NODE_WIDTH", "250"))
NODE_HEIGHT = float(os.getenv("PIPELINE_NODE_HEIGHT", "200"))
RANK_SEP = float(os.getenv("PIPELINE_RANK_SEP", "100"))
NODE_SEP = float(os.getenv("PIPELINE_NODE_SEP", "80"))

# Quiet period before an edited graph is decompiled back into the spec
SYNC_DEBOUNCE_SECONDS = int(os.getenv("PIPELINE_SYNC_DEBOUNCE_MS", "500")) / 1000

RELAYOUT_ON_INSERT = os.getenv("PIPELINE_RELAYOUT_ON_INSERT", "false").strip().lower() in ("1", "true", "yes")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
