"""
Color Blender — Per-Pixel Colours for the Phase Charts
========================================================
Two independent colour sources, both cheap enough to call for every cell
of a 150x100 grid:

  blend_color  convex mix of the four strategy anchors by normalized weight
  fold_color   piecewise fold-viability ramp (void / critical / ramp / stable)

The fold ramp bands (1, 5, 30 positives per fold) do not line up with the
fold analyzer's 1.5 / 15 categories, and the ramp is discontinuous at 1, 5
and 30. Both are kept as-is.
"""

from .constants import (
    FOLD_CRITICAL_RGB,
    FOLD_RAMP_START,
    FOLD_STABLE_RGB,
    FOLD_VOID_RGB,
    STRATEGY_RGB,
    RGB,
    StrategyType,
)
from .weight_engine import compute_weights

_OVERSAMPLE = STRATEGY_RGB[StrategyType.OVERSAMPLE]
_UNDERSAMPLE = STRATEGY_RGB[StrategyType.UNDERSAMPLE]
_HYBRID = STRATEGY_RGB[StrategyType.HYBRID]
_BASELINE = STRATEGY_RGB[StrategyType.BASELINE]


def _channel(value: float) -> int:
    return min(255, max(0, int(round(value))))


def blend_color(
    features: float,
    minority: float,
    total: float,
    sparsity: float,
    homogeneity: float,
) -> RGB:
    """Weighted mix of the strategy palette at one point of parameter space."""
    w = compute_weights(features, minority, total, sparsity, homogeneity)
    total_weight = w.total or 1

    r = g = b = 0.0
    for weight, anchor in (
        (w.oversample, _OVERSAMPLE),
        (w.undersample, _UNDERSAMPLE),
        (w.hybrid, _HYBRID),
        (w.baseline, _BASELINE),
    ):
        if weight > 0:
            share = weight / total_weight
            r += anchor.r * share
            g += anchor.g * share
            b += anchor.b * share

    return RGB(_channel(r), _channel(g), _channel(b))


def fold_color(minority: float, folds: float) -> RGB:
    """Fold-viability colour for `minority` positives split over `folds` folds."""
    min_per_fold = minority / max(1, folds)

    if min_per_fold < 1:
        return FOLD_VOID_RGB
    if min_per_fold < 5:
        return FOLD_CRITICAL_RGB
    if min_per_fold < 30:
        # red -> green through the yellow-green midpoint
        t = (min_per_fold - 5) / 25
        r0, g0, b0 = FOLD_RAMP_START
        return RGB(
            _channel(r0 + (FOLD_STABLE_RGB.r - r0) * t),
            _channel(g0 + (FOLD_STABLE_RGB.g - g0) * t),
            _channel(b0 + (FOLD_STABLE_RGB.b - b0) * t),
        )
    return FOLD_STABLE_RGB
