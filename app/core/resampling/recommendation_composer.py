"""
Recommendation Composer — Strategy Card Narrative
===================================================
Takes the weight engine's output for a dataset and produces the discrete
recommendation: winning strategy, palette colour, title, description,
rationale, sparsity warning and fold guidance.

Decision order (behaviourally significant, keep it):
  1. Arg-max of post-penalty weights (baseline, then oversample, hybrid,
     undersample, each overriding only on strictly greater weight)
  2. Sparsity-forced downgrade to baseline
       concentrated sparsity -> "Specialized <dominant>" (dominant's colour)
       otherwise             -> class weights
  3. Narrative table keyed on (dimensionality band, scarce minority)
  4. Independent high-sparsity warning
  5. Fold target / sampling mix (LOO, then folds > minority, then minority bands)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, NamedTuple, Tuple

from .constants import (
    DIM_HIGH,
    DIM_LOW,
    EFFICIENCY_RATIO,
    SPARSITY_CRITICAL,
    STRATEGY_COLORS,
    FoldStatus,
    StrategyType,
)
from .fold_analyzer import analyze_folds
from .models import (
    DatasetParams,
    FoldAnalysis,
    Recommendation,
    WeightVector,
    format_fixed,
    format_number,
    round_half_up,
)
from .weight_engine import compute_weights, minority_threshold

logger = logging.getLogger(__name__)

TRANSITION_NOTE = " You are in a complex transition zone. "


class DimBand(str, Enum):
    LOW = "low"        # p <= 20
    MEDIUM = "medium"  # p <= 100
    HIGH = "high"      # p > 100


def dimensionality_band(features: float) -> DimBand:
    if features <= DIM_LOW:
        return DimBand.LOW
    if features <= DIM_HIGH:
        return DimBand.MEDIUM
    return DimBand.HIGH


class Narrative(NamedTuple):
    title: str
    description: str
    rationale: str


@dataclass(frozen=True)
class _Facts:
    """Live numbers the narrative templates interpolate."""
    features: float
    threshold: float
    ratio: float
    transition_note: str
    use_undersampling: bool


# ═══════════════════════════════════════════════════════════════
# NARRATIVE TABLE — (band, minority < threshold) -> template
# ═══════════════════════════════════════════════════════════════

def _low_scarce(f: _Facts) -> Narrative:
    return Narrative(
        "Oversampling or Hybrid",
        "Small Dataset, Low Dimensionality.",
        f"High scarcity relative to feature space (p={format_number(f.features)})."
        f"{f.transition_note} Avoid data reduction. Augment minority class via "
        f"synthetic generation (e.g., SMOTE).",
    )


def _low_sufficient(f: _Facts) -> Narrative:
    extreme = f.ratio > EFFICIENCY_RATIO
    if f.use_undersampling:
        reason = (
            f"Class imbalance (1:{round_half_up(f.ratio)}) is extreme."
            if extreme
            else "Dataset magnitude justifies downsampling for computational feasibility."
        )
        return Narrative(
            "Undersampling (Efficiency Priority)",
            "Extreme Class Imbalance." if extreme else "Large Scale Dataset.",
            f"Efficiency required. {reason}",
        )
    return Narrative(
        "No Resampling / Class Weights",
        "Sufficient Signal Strength.",
        f"Signal-to-noise ratio likely sufficient.{f.transition_note} "
        f"Utilize Class Weights or Cost-Sensitive Learning.",
    )


def _medium_scarce(f: _Facts) -> Narrative:
    return Narrative(
        "Hybrid Strategy (Over + Under)",
        "High Dimensionality Relative to Minority Count.",
        f"Need ~{round_half_up(f.threshold)} samples to trust distribution."
        f"{f.transition_note} Pure oversampling may amplify noise. Recommended: "
        f"Hybrid approach (e.g., SMOTE + Edited Nearest Neighbors).",
    )


def _medium_sufficient(f: _Facts) -> Narrative:
    if f.use_undersampling:
        return Narrative(
            "Undersampling (Efficiency Priority)",
            "Moderate Sample Regime, High Efficiency.",
            f"Undersampling optimal for speed and 1:{round_half_up(f.ratio)} ratio.",
        )
    return Narrative(
        "No Resampling / Hybrid",
        "Moderate Sample Regime.",
        "Prioritize Class Weights. If Recall is insufficient, introduce mild oversampling.",
    )


def _high_scarce(f: _Facts) -> Narrative:
    return Narrative(
        "Hybrid or Algorithmic Approaches",
        "High-Dimensional, Sparse Regime.",
        f"High dimensionality (p={format_number(f.features)}) induces sparsity "
        f"(Curse of Dimensionality).{f.transition_note} Combine generation with "
        f"aggressive cleaning (Hybrid) or utilize Anomaly Detection models.",
    )


def _high_sufficient(f: _Facts) -> Narrative:
    return Narrative(
        "Undersampling Strategy",
        "High-Dimensional, Large Scale Data.",
        "Undersampling reduces computational load and noise without disrupting "
        "the manifold structure in high dimensions.",
    )


NARRATIVE_TABLE: Dict[Tuple[DimBand, bool], Callable[[_Facts], Narrative]] = {
    (DimBand.LOW, True): _low_scarce,
    (DimBand.LOW, False): _low_sufficient,
    (DimBand.MEDIUM, True): _medium_scarce,
    (DimBand.MEDIUM, False): _medium_sufficient,
    (DimBand.HIGH, True): _high_scarce,
    (DimBand.HIGH, False): _high_sufficient,
}


# ═══════════════════════════════════════════════════════════════
# COMPOSER
# ═══════════════════════════════════════════════════════════════

def select_strategy(weights: WeightVector) -> StrategyType:
    """Arg-max with baseline as default and left-to-right strict overrides."""
    strategy = StrategyType.BASELINE
    best = weights.baseline
    for candidate, value in (
        (StrategyType.OVERSAMPLE, weights.oversample),
        (StrategyType.HYBRID, weights.hybrid),
        (StrategyType.UNDERSAMPLE, weights.undersample),
    ):
        if value > best:
            best = value
            strategy = candidate
    return strategy


class RecommendationComposer:
    """
    Builds the strategy-card recommendation for a dataset shape.
    Stateless; one instance can serve any number of calls.
    """

    def analyze(self, params: DatasetParams) -> Recommendation:
        weights = compute_weights(
            params.features,
            params.minority,
            params.total,
            params.sparsity,
            params.sparsity_homogeneity,
        )
        strategy = select_strategy(weights)
        fold_analysis = analyze_folds(params.minority, params.folds, params.total)

        dominant = weights.dominant_original
        forced = strategy == StrategyType.BASELINE and dominant in (
            StrategyType.OVERSAMPLE,
            StrategyType.HYBRID,
        )

        result = Recommendation(
            strategy=strategy,
            title=strategy.value,
            color=STRATEGY_COLORS[strategy],
            fold_analysis=fold_analysis,
            was_forced_to_baseline=forced,
            weights=weights,
        )

        if forced:
            self._apply_forced_baseline(result, params, weights)
        else:
            self._apply_narrative(result, params, strategy)

        if not result.sparsity_warning and params.sparsity > SPARSITY_CRITICAL:
            if params.sparsity_homogeneity < 0.4:
                result.sparsity_warning = (
                    "Structured Sparsity: Use Nominal/Continuous variants (e.g., SMOTE-NC)."
                )
            else:
                result.sparsity_warning = "Caution: High sparsity reduces distance metric reliability."

        result.fold_target, result.sampling_mix = self._fold_guidance(params, fold_analysis)

        logger.debug(
            f"Recommendation for p={params.features} n_min={params.minority} "
            f"n={params.total}: {strategy.value} (forced={forced})"
        )
        return result

    # ── Branches ──

    @staticmethod
    def _apply_forced_baseline(
        result: Recommendation, params: DatasetParams, weights: WeightVector
    ) -> None:
        dominant = weights.dominant_original
        sparsity_pct = round_half_up(params.sparsity * 100)

        # Concentrated zeros can be handled per column; uniform zeros cannot
        if params.sparsity > 0.5 and params.sparsity_homogeneity < 0.3:
            result.title = f"Specialized {dominant.value}"
            result.description = "Structured Sparsity Detected."
            result.rationale = (
                f"High sparsity ({sparsity_pct}%) but concentrated. Standard interpolation "
                f"(SMOTE) is unreliable. Strategy: Process features separately—interpolate "
                f"dense columns, impute sparse ones."
            )
            result.sparsity_warning = "Recommendation: Utilize SMOTE-NC or feature-specific handling."
            result.color = STRATEGY_COLORS[dominant]
        else:
            result.title = "No Resampling / Class Weights"
            result.description = "Uniform Sparsity Risks Interpolation."
            result.rationale = (
                f"Normally {dominant.value} is best, but {sparsity_pct}% uniform sparsity "
                f"(Stability: {format_fixed(weights.stability, 2)}) renders synthetic neighborhood "
                f"generation unreliable. Use Class Weights."
            )
            result.sparsity_warning = "Critical Sparsity: Euclidean distance metrics are unstable."

    @staticmethod
    def _apply_narrative(
        result: Recommendation, params: DatasetParams, strategy: StrategyType
    ) -> None:
        threshold = minority_threshold(params.features)
        in_transition = threshold * 0.8 < params.minority < threshold * 1.2
        facts = _Facts(
            features=params.features,
            threshold=threshold,
            ratio=params.total / max(1, params.minority),
            transition_note=TRANSITION_NOTE if in_transition else "",
            use_undersampling=strategy == StrategyType.UNDERSAMPLE,
        )
        key = (dimensionality_band(params.features), params.minority < threshold)
        result.title, result.description, result.rationale = NARRATIVE_TABLE[key](facts)

    @staticmethod
    def _fold_guidance(params: DatasetParams, folds: FoldAnalysis) -> Tuple[str, str]:
        # Independent of the analyzer's own IMPOSSIBLE category
        if folds.status == FoldStatus.LOO:
            return "Leave-One-Out (LOOCV)", "N/A (All data utilized)."
        if params.folds > params.minority:
            return (
                "INVALID CONFIGURATION",
                f"Cannot stratify {format_number(params.folds)} folds with "
                f"{format_number(params.minority)} samples.",
            )

        current = format_number(folds.min_per_fold)
        if params.minority < 200:
            return (
                f"Target >15 samples per fold (Current: {current}).",
                "Primary: Oversampling. Maintain synthetic ratio ≤ 3:1.",
            )
        if params.minority < 500:
            return (
                f"Target >30 samples per fold (Current: {current}).",
                "Baseline: None. If unstable, introduce moderate oversampling.",
            )
        return "Sufficient Minority Samples.", "Undersampling or Ensemble Methods."


_composer = RecommendationComposer()


def evaluate(params: DatasetParams) -> Recommendation:
    """Recommendation for one dataset shape; called once per parameter change."""
    return _composer.analyze(params)
