"""
Resampling Advisor — Core Module
==================================
Recommends a class-imbalance strategy (oversample, undersample, hybrid or
class weights) from a dataset's shape, and paints the phase charts that
show how that recommendation changes across parameter space.

Components:
  ┌──────────────────────────────────────────────────────┐
  │ WeightEngine           — Sigmoid-blended weights     │
  │ RecommendationComposer — Strategy card narrative     │
  │ FoldAnalyzer           — CV viability categories     │
  │ ColorBlender           — Per-pixel chart colours     │
  │ PhaseChartBuilder      — 150x100 chart grids         │
  └──────────────────────────────────────────────────────┘

Usage:
  from app.core.resampling import DatasetParams, evaluate
  rec = evaluate(DatasetParams(features=50, minority=150, total=2000))
  rec.strategy, rec.title, rec.fold_analysis.label
"""

from .constants import (
    FOLD_STATUS_CONFIG,
    RGB,
    STRATEGY_COLORS,
    FoldStatus,
    StrategyType,
)
from .models import (
    DatasetParams,
    FoldAnalysis,
    Recommendation,
    WeightVector,
    apply_update,
)
from .weight_engine import compute_weights, distance_stability, minority_threshold
from .fold_analyzer import analyze_folds
from .color_blender import blend_color, fold_color
from .recommendation_composer import RecommendationComposer, evaluate
from .phase_charts import CHARTS, PhaseChart, PhaseChartBuilder

__all__ = [
    "StrategyType", "FoldStatus", "RGB",
    "STRATEGY_COLORS", "FOLD_STATUS_CONFIG",
    "DatasetParams", "WeightVector", "FoldAnalysis", "Recommendation",
    "apply_update",
    "compute_weights", "distance_stability", "minority_threshold",
    "analyze_folds",
    "blend_color", "fold_color",
    "RecommendationComposer", "evaluate",
    "CHARTS", "PhaseChart", "PhaseChartBuilder",
]
