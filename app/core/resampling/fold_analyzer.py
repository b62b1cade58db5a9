"""
Fold Analyzer — Cross-Validation Viability
============================================
Turns (minority, folds, total) into one of five validation categories,
a 0-100 viability score and two explanatory strings.

Classification order (first match wins):
  LOO         effective folds reach the row count (or 5000+)
  IMPOSSIBLE  more folds than minority samples
  LOPO        fewer than 1.5 positives per fold
  VARIANCE    fewer than 15 positives per fold
  STABLE      everything else
"""

import math

from .constants import (
    FOLD_STATUS_CONFIG,
    LOO_FOLD_LIMIT,
    LOPO_MAX_PER_FOLD,
    STABLE_PER_FOLD,
    VARIANCE_MAX_PER_FOLD,
    FoldStatus,
)
from .models import FoldAnalysis, format_fixed, format_number


def _display_min_per_fold(min_per_fold: float) -> float:
    # Two decimals below one sample, whole samples otherwise
    if min_per_fold < 1:
        return float(format_fixed(min_per_fold, 2))
    return math.floor(min_per_fold)


def analyze_folds(minority: float, folds: float, total: float) -> FoldAnalysis:
    """Classify how well `folds`-fold stratified CV can use `minority` positives."""
    effective_folds = min(folds, total)
    # Divisor floored at one so zero or negative fold counts stay reportable
    divisor = max(effective_folds, 1)
    min_per_fold = minority / divisor
    min_in_training = math.floor(minority * ((divisor - 1) / divisor))

    viability_score = min(100.0, (min_per_fold / STABLE_PER_FOLD) * 100)
    is_loocv = effective_folds >= total or effective_folds >= LOO_FOLD_LIMIT
    is_stratification_impossible = effective_folds > minority

    if is_loocv:
        status = FoldStatus.LOO
        validation_risk = "Validation reduces to binary (0/1) loss. Probability calibration is impossible."
        training_impact = (
            f"Maximizes training data (N={format_number(total - 1)}), "
            f"but computationally expensive."
        )
    elif is_stratification_impossible:
        status = FoldStatus.IMPOSSIBLE
        validation_risk = (
            f"Folds (k={format_number(effective_folds)}) > Minority Samples "
            f"({format_number(minority)}). Stratification is impossible."
        )
        training_impact = "N/A"
    elif min_per_fold < LOPO_MAX_PER_FOLD:
        status = FoldStatus.LOPO
        validation_risk = "Single positive sample per fold prevents variance estimation."
        training_impact = f"Maximized Training (~{format_number(minority - 1)} positives per round)."
    elif min_per_fold < VARIANCE_MAX_PER_FOLD:
        status = FoldStatus.VARIANCE
        validation_risk = (
            f"Low density ({format_fixed(min_per_fold, 1)} samples/fold) results in noisy performance metrics."
        )
        training_impact = "High training data retention, but reduced validation reliability."
    else:
        status = FoldStatus.STABLE
        validation_risk = "Sufficient density for stable metric estimation (e.g., AUC-ROC, F1)."
        training_impact = "Standard Stratified K-Fold Split."

    if is_stratification_impossible and not is_loocv:
        viability_score = 0.0

    style = FOLD_STATUS_CONFIG[status]
    return FoldAnalysis(
        min_per_fold=_display_min_per_fold(min_per_fold),
        min_in_training=min_in_training,
        effective_folds=effective_folds,
        status=status,
        label=style.label,
        status_color=style.color,
        status_bg=style.bg,
        viability_score=viability_score,
        validation_risk=validation_risk,
        training_impact=training_impact,
    )
