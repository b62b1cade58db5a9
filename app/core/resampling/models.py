"""
Resampling Models — Inputs and Outputs of the Advisor
=======================================================
Plain dataclasses passed between the engine components. None of them own
any behaviour beyond serialization; the engine never mutates its inputs.
"""

import math
from dataclasses import dataclass, field, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from .constants import FoldStatus, StrategyType


@dataclass(frozen=True)
class DatasetParams:
    """Shape of the dataset being advised on."""
    features: float = 50
    minority: float = 150
    total: float = 2000
    folds: float = 5
    sparsity: float = 0.0                # 0.0 .. 0.99
    sparsity_homogeneity: float = 0.5    # 0 = concentrated zeros, 1 = uniform zeros

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def apply_update(params: DatasetParams, changes: Dict[str, Any]) -> DatasetParams:
    """
    Merge a partial update into params, keeping total >= minority.

    When the merge breaks the constraint, whichever of the two fields was
    just changed is pulled onto the other one.
    """
    known = {f.name for f in fields(DatasetParams)}
    updates = {k: v for k, v in changes.items() if k in known and v is not None}
    merged = replace(params, **updates)

    if merged.total < merged.minority:
        if updates.get("total"):
            merged = replace(merged, total=merged.minority)
        if updates.get("minority"):
            merged = replace(merged, minority=merged.total)
    return merged


@dataclass
class WeightVector:
    """Unnormalized strategy weights after the sparsity penalty."""
    oversample: float = 0.0
    undersample: float = 0.0
    hybrid: float = 0.0
    baseline: float = 0.0
    stability: float = 1.0
    dominant_original: StrategyType = StrategyType.BASELINE

    @property
    def total(self) -> float:
        return self.oversample + self.undersample + self.hybrid + self.baseline

    def to_dict(self) -> Dict[str, Any]:
        return {
            "oversample": round(self.oversample, 6),
            "undersample": round(self.undersample, 6),
            "hybrid": round(self.hybrid, 6),
            "baseline": round(self.baseline, 6),
            "stability": round(self.stability, 6),
            "dominant_original": self.dominant_original.value,
        }


@dataclass
class FoldAnalysis:
    """Cross-validation viability for a (minority, folds, total) triple."""
    min_per_fold: float
    min_in_training: int
    effective_folds: float
    status: FoldStatus
    label: str
    status_color: str
    status_bg: str
    viability_score: float        # 0-100
    validation_risk: str
    training_impact: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_per_fold": self.min_per_fold,
            "min_in_training": self.min_in_training,
            "effective_folds": self.effective_folds,
            "status": self.status.value,
            "label": self.label,
            "status_color": self.status_color,
            "status_bg": self.status_bg,
            "viability_score": self.viability_score,
            "validation_risk": self.validation_risk,
            "training_impact": self.training_impact,
        }


@dataclass
class Recommendation:
    """Discrete recommendation shown on the strategy card."""
    strategy: StrategyType
    title: str
    color: str
    fold_analysis: FoldAnalysis
    description: str = ""
    rationale: str = ""
    fold_target: str = ""
    sampling_mix: str = ""
    sparsity_warning: Optional[str] = None
    was_forced_to_baseline: bool = False
    weights: Optional[WeightVector] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy.value,
            "title": self.title,
            "description": self.description,
            "rationale": self.rationale,
            "fold_target": self.fold_target,
            "sampling_mix": self.sampling_mix,
            "color": self.color,
            "sparsity_warning": self.sparsity_warning,
            "was_forced_to_baseline": self.was_forced_to_baseline,
            "fold_analysis": self.fold_analysis.to_dict(),
            "weights": self.weights.to_dict() if self.weights else None,
        }


# ── Text helpers shared by the narrative builders ──

def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, like the UI's integer display."""
    return int(math.floor(value + 0.5))


def format_fixed(value: float, digits: int) -> str:
    """
    Fixed-point text with exact halves rounded up, matching the UI's
    toFixed(). Rounds the exact binary value, so 0.125 -> '0.13'.
    """
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Render integral floats without a trailing '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
