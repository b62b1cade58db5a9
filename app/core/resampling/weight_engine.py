"""
Weight Engine — Smooth Multi-Regime Strategy Weights
======================================================
Maps the five dataset-shape inputs to four unnormalized strategy weights
(oversample, undersample, hybrid, baseline).

Pipeline:
  1. Minority-sufficiency threshold T(p) from the feature count
  2. Log-space sigmoid gates: dimensionality, scarcity, efficiency pressure
  3. Additive distribution over low / medium / high dimensional regimes
  4. Degenerate-mass fallback to baseline
  5. Pre-penalty dominant strategy
  6. Sparsity penalty: oversample/hybrid mass moves into baseline

Every function here is total over numeric input. Counts are floored at 1
before any logarithm or division, so zeros and boundary values never raise.
"""

import math

from .constants import (
    DIM_HIGH,
    DIM_LOW,
    EFFICIENCY_RATIO,
    EFFICIENCY_TOTAL,
    K_DIMENSION,
    K_EFFICIENCY,
    K_MINORITY,
    MIN_SAMPLES_BASE,
    MIN_TOTAL_WEIGHT,
    REGIME_ACTIVATION,
    SPARSITY_SKEWED,
    StrategyType,
)
from .models import WeightVector


def sigmoid(value: float, threshold: float, k: float = K_DIMENSION) -> float:
    """Logistic gate on log10(value) - log10(threshold), both floored at 1."""
    x = math.log10(max(value, 1))
    t = math.log10(max(threshold, 1))
    z = -k * (x - t)
    # exp overflows past ~709; the gate is already 0 there
    if z > 700:
        return 0.0
    return 1 / (1 + math.exp(z))


def minority_threshold(features: float) -> float:
    """
    Minority count needed to trust a learned decision boundary at this
    dimensionality. Flat up to 20 features, linear to 100, logarithmic after.
    """
    if features <= DIM_LOW:
        return float(MIN_SAMPLES_BASE)
    if features <= DIM_HIGH:
        return MIN_SAMPLES_BASE + (features - DIM_LOW) * 2.5
    return 400 + 200 * math.log10(features / 100)


def distance_stability(sparsity: float, homogeneity: float) -> float:
    """How much distance-based synthetic sampling can be trusted (0..1)."""
    if sparsity < SPARSITY_SKEWED:
        return 1.0
    base_instability = max(sparsity, 0.0) ** 2.5
    distribution_impact = 0.2 + 0.8 * homogeneity
    risk = base_instability * distribution_impact
    return max(0.0, 1 - risk)


def compute_weights(
    features: float,
    minority: float,
    total: float,
    sparsity: float,
    homogeneity: float,
) -> WeightVector:
    """Compute the post-penalty strategy weights for one point of parameter space."""
    threshold = minority_threshold(features)

    # Dimensionality
    is_low_dim = 1 - sigmoid(features, DIM_LOW, K_DIMENSION)
    is_high_dim = sigmoid(features, DIM_HIGH, K_DIMENSION)
    is_med_dim = 1 - is_low_dim - is_high_dim

    # Scarcity
    is_tiny_minority = 1 - sigmoid(minority, threshold, K_MINORITY)

    # Efficiency pressure: extreme imbalance OR sheer size
    ratio = total / max(1, minority)
    is_high_ratio = sigmoid(ratio, EFFICIENCY_RATIO, K_EFFICIENCY)
    is_large_total = sigmoid(total, EFFICIENCY_TOTAL, K_EFFICIENCY)
    efficiency = max(is_high_ratio, is_large_total)

    oversample = undersample = hybrid = baseline = 0.0

    if is_low_dim > REGIME_ACTIVATION:
        oversample += is_low_dim * is_tiny_minority
        safe = is_low_dim * (1 - is_tiny_minority)
        undersample += safe * efficiency
        baseline += safe * (1 - efficiency)

    if is_med_dim > REGIME_ACTIVATION:
        hybrid += is_med_dim * is_tiny_minority
        safe = is_med_dim * (1 - is_tiny_minority)
        undersample += safe * efficiency
        baseline += safe * (1 - efficiency)

    # High dimensions never fall back to plain class weights
    if is_high_dim > REGIME_ACTIVATION:
        hybrid += is_high_dim * is_tiny_minority
        undersample += is_high_dim * (1 - is_tiny_minority)

    if oversample + undersample + hybrid + baseline < MIN_TOTAL_WEIGHT:
        baseline = 1.0

    top = max(oversample, undersample, hybrid, baseline)
    if top == oversample:
        dominant = StrategyType.OVERSAMPLE
    elif top == hybrid:
        dominant = StrategyType.HYBRID
    elif top == undersample:
        dominant = StrategyType.UNDERSAMPLE
    else:
        dominant = StrategyType.BASELINE

    stability = distance_stability(sparsity, homogeneity)
    penalty = 1 - stability
    if penalty > 0:
        moved_oversample = oversample * penalty
        moved_hybrid = hybrid * penalty
        oversample -= moved_oversample
        hybrid -= moved_hybrid
        baseline += moved_oversample + moved_hybrid

    return WeightVector(
        oversample=oversample,
        undersample=undersample,
        hybrid=hybrid,
        baseline=baseline,
        stability=stability,
        dominant_original=dominant,
    )
