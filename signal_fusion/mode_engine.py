"""
Mode Engine

Decides the final trade side from per-timeframe signals.

NORMAL mode takes a majority vote among eligible frames; PRECISION mode
requires the 5m and 1h frames to agree and the longer horizon not to
oppose them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Iterable
import logging

from .signal_model import Timeframe, TradeSide, PerTimeframeSignal

logger = logging.getLogger(__name__)


class PredictionMode(str, Enum):
    """Consensus policy used to pick the final side."""
    NORMAL = "normal"
    PRECISION = "precision"


# Eligibility thresholds per mode (can be overridden at initialization)
DEFAULT_MODE_THRESHOLDS = {
    PredictionMode.NORMAL: {
        'min_probability': 0.60,
        'max_uncertainty': 0.60,
    },
    PredictionMode.PRECISION: {
        'min_probability': 0.70,
        'max_uncertainty': 0.40,
    },
}


@dataclass(frozen=True)
class ModeProcessingResult:
    """Final side chosen by the mode engine plus diagnostic notes."""
    final_side: TradeSide
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            'final_side': self.final_side.value,
            'notes': list(self.notes),
        }


class ModeEngine(ABC):
    """Interface for final-side decision policies."""

    @abstractmethod
    def combine(
        self,
        frames: Iterable[PerTimeframeSignal],
        mode: PredictionMode,
    ) -> ModeProcessingResult:
        pass


class SimpleModeEngine(ModeEngine):
    """Threshold filter followed by majority vote or strict consensus."""

    def __init__(self, thresholds: Optional[Dict[str, Dict[str, float]]] = None):
        """
        Initialize mode engine.

        Args:
            thresholds: Optional override of DEFAULT_MODE_THRESHOLDS, keyed by
                mode name ("normal"/"precision") or PredictionMode
        """
        self.thresholds = {
            mode: dict(values) for mode, values in DEFAULT_MODE_THRESHOLDS.items()
        }
        if thresholds:
            for mode_key, values in thresholds.items():
                mode = PredictionMode(mode_key)
                self.thresholds[mode].update(values)

    def eligible_frames(
        self,
        frames: Iterable[PerTimeframeSignal],
        mode: PredictionMode,
    ) -> List[PerTimeframeSignal]:
        """Frames that passed their gate and clear the mode's thresholds."""
        limits = self.thresholds[mode]
        return [
            f for f in frames
            if f.gate_pass
            and f.probability_upper_index >= limits['min_probability']
            and f.uncertainty <= limits['max_uncertainty']
        ]

    def combine(
        self,
        frames: Iterable[PerTimeframeSignal],
        mode: PredictionMode = PredictionMode.NORMAL,
    ) -> ModeProcessingResult:
        """
        Pick the final side for a set of frames.

        Args:
            frames: Per-timeframe signals
            mode: NORMAL (majority vote) or PRECISION (5m+1h consensus)

        Returns:
            ModeProcessingResult; HOLD when nothing is eligible or no
            consensus is reached
        """
        mode = PredictionMode(mode)
        eligible = self.eligible_frames(frames, mode)

        if not eligible:
            logger.debug(f"No eligible frames in {mode.value} mode")
            return ModeProcessingResult(TradeSide.HOLD, ["no eligible frames"])

        if mode == PredictionMode.PRECISION:
            return self._precision_consensus(eligible)
        return self._majority_vote(eligible)

    def _precision_consensus(self, eligible: List[PerTimeframeSignal]) -> ModeProcessingResult:
        m5 = self._first_side(eligible, Timeframe.M5)
        h1 = self._first_side(eligible, Timeframe.H1)
        h4 = self._first_side(eligible, Timeframe.H4)

        if m5 == TradeSide.LONG and h1 == TradeSide.LONG and h4 != TradeSide.SHORT:
            return ModeProcessingResult(TradeSide.LONG)
        if m5 == TradeSide.SHORT and h1 == TradeSide.SHORT and h4 != TradeSide.LONG:
            return ModeProcessingResult(TradeSide.SHORT)
        return ModeProcessingResult(TradeSide.HOLD, ["no consensus"])

    def _majority_vote(self, eligible: List[PerTimeframeSignal]) -> ModeProcessingResult:
        votes = {TradeSide.LONG: 1, TradeSide.SHORT: -1, TradeSide.HOLD: 0}
        total = sum(votes[f.side] for f in eligible)

        if total > 0:
            return ModeProcessingResult(TradeSide.LONG)
        if total < 0:
            return ModeProcessingResult(TradeSide.SHORT)
        return ModeProcessingResult(TradeSide.HOLD, ["tie"])

    @staticmethod
    def _first_side(frames: List[PerTimeframeSignal], timeframe: Timeframe) -> TradeSide:
        for f in frames:
            if f.timeframe == timeframe:
                return f.side
        return TradeSide.HOLD
