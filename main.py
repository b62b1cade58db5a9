"""
Resample Lab — FastAPI Server (Port 8001)
===========================================
Class-imbalance strategy advisor: smooth multi-factor recommendation
engine, cross-validation fold viability, and phase-chart colour grids.

Run:
  uvicorn main:app --host 0.0.0.0 --port 8001 --reload
  # or
  python main.py
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load .env file BEFORE anything reads os.getenv()
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from app.config import settings  # noqa: E402

# ── Logging ──
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("resample_lab")


# ── Lifespan: warm up ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        from app.core.resampling import DatasetParams, PhaseChartBuilder, evaluate
        rec = evaluate(DatasetParams())
        charts = PhaseChartBuilder.list_charts()
        logger.info(
            f"Engine warmed up: default recommendation '{rec.strategy.value}', "
            f"{len(charts)} phase charts"
        )
    except Exception as e:
        logger.warning(f"Engine warmup partial: {e}")

    yield
    logger.info("Shutting down Resample Lab")


# ── Create FastAPI app ──
app = FastAPI(
    title="Resample Lab",
    description=(
        "How to handle class imbalance: oversampling, undersampling, hybrid "
        "or class weights, recommended from feature count, minority count, "
        "total rows, CV folds and sparsity. Includes fold viability analysis "
        "and phase-chart colour grids."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Mount all API routes ──
from app.api.router import api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")


# ── Root ──
@app.get("/", tags=["Root"])
async def root():
    return {
        "service": "Resample Lab",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "advisor": "/api/v1/resampling/ (9 endpoints)",
        },
        "health": "/api/v1/resampling/health",
    }


# ── Direct run ──
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )
