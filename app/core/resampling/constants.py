"""
Resampling Constants — Palette, Decision Thresholds, Fold Status Table
=======================================================================
Fixed lookup tables shared by the weight engine, the recommendation
composer, the fold analyzer and the colour blender. Everything here is
built once at import time; nothing is re-derived per call.

Contents:
  1. Strategy & fold status tags
  2. Strategy palette (hex) + decoded RGB anchors
  3. Decision thresholds
  4. Fold status display config
"""

from enum import Enum
from typing import Dict, NamedTuple


# ═══════════════════════════════════════════════════════════════════
# 1. TAGS
# ═══════════════════════════════════════════════════════════════════

class StrategyType(str, Enum):
    """Resampling strategy families the advisor can recommend."""
    OVERSAMPLE = "Oversample"
    UNDERSAMPLE = "Undersample"
    HYBRID = "Hybrid"
    BASELINE = "No Resampling / Class Weights"


class FoldStatus(str, Enum):
    """Cross-validation viability categories, in classification order."""
    LOO = "LOO"
    IMPOSSIBLE = "IMPOSSIBLE"
    LOPO = "LOPO"
    VARIANCE = "VARIANCE"
    STABLE = "STABLE"


# ═══════════════════════════════════════════════════════════════════
# 2. PALETTE
# ═══════════════════════════════════════════════════════════════════

class RGB(NamedTuple):
    """Integer colour triple in [0, 255]."""
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, hex_color: str) -> "RGB":
        return cls(
            int(hex_color[1:3], 16),
            int(hex_color[3:5], 16),
            int(hex_color[5:7], 16),
        )

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_dict(self) -> Dict[str, object]:
        return {"r": self.r, "g": self.g, "b": self.b, "hex": self.to_hex()}


STRATEGY_COLORS: Dict[StrategyType, str] = {
    StrategyType.OVERSAMPLE: "#ef4444",   # red
    StrategyType.UNDERSAMPLE: "#3b82f6",  # blue
    StrategyType.HYBRID: "#a855f7",       # purple
    StrategyType.BASELINE: "#10b981",     # emerald
}

# Decoded once; the per-pixel blender reads these directly.
STRATEGY_RGB: Dict[StrategyType, RGB] = {
    strategy: RGB.from_hex(hex_color) for strategy, hex_color in STRATEGY_COLORS.items()
}


# ═══════════════════════════════════════════════════════════════════
# 3. THRESHOLDS
# ═══════════════════════════════════════════════════════════════════

DIM_LOW = 20
DIM_HIGH = 100
MIN_SAMPLES_BASE = 200
EFFICIENCY_RATIO = 60          # 1:60 imbalance
EFFICIENCY_TOTAL = 150_000     # 150k rows
SPARSITY_CRITICAL = 0.6
SPARSITY_SKEWED = 0.3

# Sigmoid steepness per gate
K_DIMENSION = 12
K_MINORITY = 10
K_EFFICIENCY = 8

MIN_TOTAL_WEIGHT = 0.001
REGIME_ACTIVATION = 0.01

# Fold analyzer
LOO_FOLD_LIMIT = 5000
LOPO_MAX_PER_FOLD = 1.5
VARIANCE_MAX_PER_FOLD = 15
STABLE_PER_FOLD = 30


# ═══════════════════════════════════════════════════════════════════
# 4. FOLD STATUS DISPLAY CONFIG
# ═══════════════════════════════════════════════════════════════════

class FoldStatusStyle(NamedTuple):
    label: str
    color: str
    bg: str


FOLD_STATUS_CONFIG: Dict[FoldStatus, FoldStatusStyle] = {
    FoldStatus.LOO: FoldStatusStyle(
        label="Leave-One-Out Cross-Validation",
        color="text-pink-400",
        bg="bg-pink-500/20 border-pink-500/30",
    ),
    FoldStatus.IMPOSSIBLE: FoldStatusStyle(
        label="Statistically Invalid",
        color="text-zinc-500",
        bg="bg-zinc-800 border-zinc-700",
    ),
    FoldStatus.LOPO: FoldStatusStyle(
        label="Leave-One-Positive-Out (Stratified)",
        color="text-purple-400",
        bg="bg-purple-500/20 border-purple-500/30",
    ),
    FoldStatus.VARIANCE: FoldStatusStyle(
        label="High Variance Region",
        color="text-amber-400",
        bg="bg-amber-500/20 border-amber-500/30",
    ),
    FoldStatus.STABLE: FoldStatusStyle(
        label="Stable Evaluation",
        color="text-emerald-400",
        bg="bg-emerald-500/20 border-emerald-500/30",
    ),
}

# Fold-viability colour ramp anchors
FOLD_VOID_RGB = RGB(20, 10, 10)
FOLD_CRITICAL_RGB = RGB(220, 40, 40)
FOLD_RAMP_START = (239, 68, 68)
FOLD_STABLE_RGB = RGB(16, 185, 129)
