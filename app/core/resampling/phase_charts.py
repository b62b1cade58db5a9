"""
Phase Charts — Grid Sampling for the Four Resampling Phase Charts
===================================================================
Evaluates the colour engine over a 150x100 grid for each chart and
describes the geometry a renderer paints on top of it.

Charts:
  features_vs_minority  blend colour, invalid where minority > total
  features_vs_total     blend colour, invalid where total < minority
  total_vs_minority     blend colour, invalid below the total = minority diagonal
  folds_vs_minority     fold colour,  invalid above the folds = minority diagonal

Each chart holds two of the five parameters on its axes and the rest at
the caller's current values. Row 0 of the grid is the top of the chart
(largest y value).

Usage:
  builder = PhaseChartBuilder()
  chart = builder.build("features_vs_minority", params)
  chart.grid.shape  # (100, 150, 3), dtype uint8
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .color_blender import blend_color, fold_color
from .constants import RGB
from .models import DatasetParams

logger = logging.getLogger(__name__)

CANVAS_RES_X = 150
CANVAS_RES_Y = 100
INVALID_RGB = RGB(25, 15, 15)


# ═══════════════════════════════════════════════════════════════
# AXES
# ═══════════════════════════════════════════════════════════════

def _to_log(value: float) -> float:
    return math.log10(max(value, 1))


@dataclass(frozen=True)
class AxisConfig:
    """One chart axis bound to a DatasetParams field."""
    key: str
    min: float
    max: float
    label: str
    scale: str = "log"    # log | linear

    @property
    def is_log(self) -> bool:
        return self.scale == "log"

    def value_at(self, pct: float) -> float:
        """Parameter value at fraction `pct` (0..1) along the axis."""
        if self.is_log:
            log_min, log_max = _to_log(self.min), _to_log(self.max)
            return 10 ** (log_min + pct * (log_max - log_min))
        return self.min + pct * (self.max - self.min)

    def pct_of(self, value: float) -> float:
        """Fraction along the axis for `value`; may fall outside 0..1."""
        if self.is_log:
            log_min, log_max = _to_log(self.min), _to_log(self.max)
            return (_to_log(value) - log_min) / (log_max - log_min)
        return (value - self.min) / (self.max - self.min)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key, "min": self.min, "max": self.max,
            "label": self.label, "scale": self.scale,
        }


MINORITY_AXIS = AxisConfig("minority", 10, 10_000, "Minority (N)")
FEATURES_AXIS = AxisConfig("features", 5, 10_000, "Features (p)")
TOTAL_AXIS = AxisConfig("total", 100, 10_000_000, "Total Samples")
FOLDS_AXIS = AxisConfig("folds", 2, 100, "CV Folds (K)")


# ═══════════════════════════════════════════════════════════════
# CHART DEFINITIONS
# ═══════════════════════════════════════════════════════════════

ColorFn = Callable[[float, float, DatasetParams], RGB]
ValidFn = Callable[[float, float, DatasetParams], bool]


@dataclass(frozen=True)
class ChartSpec:
    key: str
    title: str
    x_axis: AxisConfig
    y_axis: AxisConfig
    color: ColorFn
    is_valid: ValidFn
    boundary: str          # vertical_total | vertical_minority | diagonal


CHARTS: Dict[str, ChartSpec] = {
    "features_vs_minority": ChartSpec(
        key="features_vs_minority",
        title="Features vs. Minority",
        x_axis=MINORITY_AXIS,
        y_axis=FEATURES_AXIS,
        color=lambda x, y, p: blend_color(y, x, p.total, p.sparsity, p.sparsity_homogeneity),
        is_valid=lambda x, y, p: x <= p.total,
        boundary="vertical_total",
    ),
    "features_vs_total": ChartSpec(
        key="features_vs_total",
        title="Features vs. Total",
        x_axis=TOTAL_AXIS,
        y_axis=FEATURES_AXIS,
        color=lambda x, y, p: blend_color(y, p.minority, x, p.sparsity, p.sparsity_homogeneity),
        is_valid=lambda x, y, p: x >= p.minority,
        boundary="vertical_minority",
    ),
    "total_vs_minority": ChartSpec(
        key="total_vs_minority",
        title="Total vs. Minority",
        x_axis=MINORITY_AXIS,
        y_axis=TOTAL_AXIS,
        color=lambda x, y, p: blend_color(p.features, x, y, p.sparsity, p.sparsity_homogeneity),
        is_valid=lambda x, y, p: y >= x,
        boundary="diagonal",
    ),
    "folds_vs_minority": ChartSpec(
        key="folds_vs_minority",
        title="Folds vs. Minority",
        x_axis=MINORITY_AXIS,
        y_axis=FOLDS_AXIS,
        color=lambda x, y, p: fold_color(x, y),
        is_valid=lambda x, y, p: y <= x,
        boundary="diagonal",
    ),
}


# ═══════════════════════════════════════════════════════════════
# RESULT
# ═══════════════════════════════════════════════════════════════

@dataclass
class Boundary:
    """Impossible-region edge in chart fractions (y measured from the top)."""
    kind: str                                   # vertical | diagonal
    points: List[Tuple[float, float]] = field(default_factory=list)
    label: str = "IMPOSSIBLE REGION"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "points": [[round(x, 6), round(y, 6)] for x, y in self.points],
            "label": self.label,
        }


@dataclass
class PhaseChart:
    key: str
    title: str
    x_axis: AxisConfig
    y_axis: AxisConfig
    grid: np.ndarray                            # (rows, cols, 3) uint8
    valid_mask: np.ndarray                      # (rows, cols) bool
    marker: Tuple[float, float]
    boundary: Optional[Boundary] = None
    elapsed_ms: float = 0.0

    def to_dict(self, include_grid: bool = True) -> Dict[str, Any]:
        out = {
            "key": self.key,
            "title": self.title,
            "x_axis": self.x_axis.to_dict(),
            "y_axis": self.y_axis.to_dict(),
            "width": int(self.grid.shape[1]),
            "height": int(self.grid.shape[0]),
            "marker": {"x_pct": round(self.marker[0], 6), "y_pct": round(self.marker[1], 6)},
            "boundary": self.boundary.to_dict() if self.boundary else None,
            "invalid_fraction": round(float(1 - self.valid_mask.mean()), 4),
            "elapsed_ms": round(self.elapsed_ms, 2),
        }
        if include_grid:
            out["grid"] = self.grid.tolist()
        return out


# ═══════════════════════════════════════════════════════════════
# BUILDER
# ═══════════════════════════════════════════════════════════════

class PhaseChartBuilder:
    """
    Paints phase-chart grids by calling the colour engine once per cell.
    """

    def __init__(self, res_x: int = CANVAS_RES_X, res_y: int = CANVAS_RES_Y):
        self.res_x = res_x
        self.res_y = res_y

    @staticmethod
    def list_charts() -> List[str]:
        return list(CHARTS)

    def build(self, chart_key: str, params: DatasetParams) -> PhaseChart:
        """Evaluate one chart. Raises KeyError for an unknown chart key."""
        spec = CHARTS[chart_key]
        started = time.perf_counter()

        grid = np.empty((self.res_y, self.res_x, 3), dtype=np.uint8)
        valid = np.zeros((self.res_y, self.res_x), dtype=bool)

        x_values = [spec.x_axis.value_at(px / self.res_x) for px in range(self.res_x)]
        for py in range(self.res_y):
            y_val = spec.y_axis.value_at(1 - py / self.res_y)
            for px, x_val in enumerate(x_values):
                if spec.is_valid(x_val, y_val, params):
                    grid[py, px] = spec.color(x_val, y_val, params)
                    valid[py, px] = True
                else:
                    grid[py, px] = INVALID_RGB

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Phase chart '{chart_key}' painted in {elapsed_ms:.1f} ms")

        return PhaseChart(
            key=spec.key,
            title=spec.title,
            x_axis=spec.x_axis,
            y_axis=spec.y_axis,
            grid=grid,
            valid_mask=valid,
            marker=self.marker(spec, params),
            boundary=self.boundary(spec, params),
            elapsed_ms=elapsed_ms,
        )

    def build_all(self, params: DatasetParams) -> Dict[str, PhaseChart]:
        return {key: self.build(key, params) for key in CHARTS}

    @staticmethod
    def marker(spec: ChartSpec, params: DatasetParams) -> Tuple[float, float]:
        """Current parameter position as (x_pct, y_pct from the top)."""
        x_val = getattr(params, spec.x_axis.key)
        y_val = getattr(params, spec.y_axis.key)
        return spec.x_axis.pct_of(x_val), 1 - spec.y_axis.pct_of(y_val)

    @staticmethod
    def boundary(spec: ChartSpec, params: DatasetParams) -> Optional[Boundary]:
        """Impossible-region edge for the chart, or None when off-axis."""
        if spec.boundary in ("vertical_total", "vertical_minority"):
            at = params.total if spec.boundary == "vertical_total" else params.minority
            pct = spec.x_axis.pct_of(at)
            if pct < 0 or pct > 1:
                return None
            return Boundary(kind="vertical", points=[(pct, 0.0), (pct, 1.0)])

        # y = x, clipped to the range both axes share
        start = max(spec.x_axis.min, spec.y_axis.min)
        end = min(spec.x_axis.max, spec.y_axis.max)
        if start >= end:
            return None
        points = [
            (spec.x_axis.pct_of(v), 1 - spec.y_axis.pct_of(v))
            for v in (start, end)
        ]
        return Boundary(kind="diagonal", points=points)
