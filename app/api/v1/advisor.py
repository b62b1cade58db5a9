"""
Resampling Advisor — API Endpoints
====================================
FastAPI router exposing the recommendation engine's pure functions.

Endpoints:
  POST /recommend                — Strategy card for a dataset shape
  POST /weights                  — Raw post-penalty strategy weights
  POST /blend-color              — Blended strategy colour at one point
  GET  /fold-color               — Fold-viability ramp colour
  GET  /fold-analysis            — CV viability category + score
  POST /params/update            — Apply a partial update (total >= minority)
  POST /phase-charts/{chart}     — 150x100 colour grid + boundary + marker
  GET  /palette                  — Strategy legend
  GET  /health                   — Component health check

Integration (in main.py):
  from app.api.router import api_router
  app.include_router(api_router, prefix="/api/v1")
"""

import logging
import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Query

from app.config import settings
from app.core.resampling import (
    CHARTS,
    STRATEGY_COLORS,
    DatasetParams,
    PhaseChartBuilder,
    analyze_folds,
    apply_update,
    blend_color,
    compute_weights,
    evaluate,
    fold_color,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ═══════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════

class DatasetParamsRequest(BaseModel):
    features: float = Field(50, ge=0, description="Feature count (p)")
    minority: float = Field(150, ge=0, description="Minority-class sample count")
    total: float = Field(2000, ge=0, description="Total samples (minority + majority)")
    folds: float = Field(5, ge=0, description="Cross-validation folds (k)")
    sparsity: float = Field(0.0, ge=0, le=0.99, description="Fraction of zero/null values")
    sparsity_homogeneity: float = Field(
        0.5, ge=0, le=1,
        description="Where the zeros are: 0 = concentrated in columns, 1 = spread uniformly",
    )

    def to_params(self) -> DatasetParams:
        return DatasetParams(
            features=self.features,
            minority=self.minority,
            total=self.total,
            folds=self.folds,
            sparsity=self.sparsity,
            sparsity_homogeneity=self.sparsity_homogeneity,
        )


class ParamsUpdateRequest(BaseModel):
    current: DatasetParamsRequest = Field(default_factory=DatasetParamsRequest)
    changes: Dict[str, float] = Field(..., description="Partial update, e.g. {\"total\": 100}")


class PhaseChartRequest(DatasetParamsRequest):
    include_grid: bool = Field(True, description="Return the full RGB grid (rows x cols x 3)")


# ═══════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════

class ColorResponse(BaseModel):
    r: int
    g: int
    b: int
    hex: str


class HealthResponse(BaseModel):
    status: str
    components: Dict[str, str]
    version: str
    charts: List[str] = []
    uptime_seconds: Optional[float] = None


# ═══════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════

_start_time = time.time()
_chart_builder = PhaseChartBuilder(res_x=settings.CHART_RES_X, res_y=settings.CHART_RES_Y)


@router.post("/recommend")
async def recommend(request: DatasetParamsRequest) -> Dict[str, Any]:
    """
    Strategy recommendation for the given dataset shape.

    Pipeline: Weight Engine → arg-max → sparsity downgrade check →
    narrative table → sparsity warning → fold guidance
    """
    try:
        return evaluate(request.to_params()).to_dict()
    except Exception as e:
        logger.error(f"Recommendation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.post("/weights")
async def weights(request: DatasetParamsRequest) -> Dict[str, Any]:
    """Post-penalty strategy weights plus distance stability."""
    try:
        p = request.to_params()
        return compute_weights(
            p.features, p.minority, p.total, p.sparsity, p.sparsity_homogeneity
        ).to_dict()
    except Exception as e:
        logger.error(f"Weights error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.post("/blend-color", response_model=ColorResponse)
async def get_blend_color(request: DatasetParamsRequest):
    """Blended strategy colour at one point of parameter space."""
    try:
        rgb = blend_color(
            request.features, request.minority, request.total,
            request.sparsity, request.sparsity_homogeneity,
        )
        return ColorResponse(**rgb.to_dict())
    except Exception as e:
        logger.error(f"Blend colour error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.get("/fold-color", response_model=ColorResponse)
async def get_fold_color(
        minority: float = Query(..., ge=0, description="Minority samples"),
        folds: float = Query(..., ge=0, description="CV folds"),
):
    """Fold-viability ramp colour."""
    try:
        return ColorResponse(**fold_color(minority, folds).to_dict())
    except Exception as e:
        logger.error(f"Fold colour error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.get("/fold-analysis")
async def get_fold_analysis(
        minority: float = Query(..., ge=0, description="Minority samples"),
        folds: float = Query(..., ge=0, description="CV folds"),
        total: float = Query(..., ge=0, description="Total samples"),
) -> Dict[str, Any]:
    """Cross-validation viability category, score and explanation."""
    try:
        return analyze_folds(minority, folds, total).to_dict()
    except Exception as e:
        logger.error(f"Fold analysis error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.post("/params/update")
async def update_params(request: ParamsUpdateRequest) -> Dict[str, Any]:
    """Apply a partial parameter update, keeping total >= minority."""
    try:
        updated = apply_update(request.current.to_params(), request.changes)
        return updated.to_dict()
    except Exception as e:
        logger.error(f"Params update error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.post("/phase-charts/{chart}")
async def get_phase_chart(chart: str, request: PhaseChartRequest) -> Dict[str, Any]:
    """
    Evaluate one phase chart over its full grid.
    Invalid cells (impossible parameter combinations) carry the void colour.
    """
    if chart not in CHARTS:
        raise HTTPException(
            status_code=404,
            detail={
                "error": "unknown_chart",
                "message": f"Unknown chart '{chart}'",
                "available": list(CHARTS),
            },
        )
    try:
        result = _chart_builder.build(chart, request.to_params())
        return result.to_dict(include_grid=request.include_grid)
    except Exception as e:
        logger.error(f"Phase chart '{chart}' error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})


@router.get("/palette")
async def palette() -> Dict[str, str]:
    """Strategy → hex colour legend."""
    return {strategy.value: color for strategy, color in STRATEGY_COLORS.items()}


@router.get("/health", response_model=HealthResponse)
async def advisor_health():
    """Advisor health check — reports status of all components."""
    components = {
        "weight_engine": "active",
        "recommendation_composer": "active",
        "fold_analyzer": "active",
        "color_blender": "active",
        "phase_charts": f"active ({_chart_builder.res_x}x{_chart_builder.res_y})",
    }
    return HealthResponse(
        status="healthy",
        components=components,
        version="1.0.0",
        charts=list(CHARTS),
        uptime_seconds=round(time.time() - _start_time, 1),
    )
