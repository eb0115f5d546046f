"""
Meta-Confidence Calculation

Blends per-timeframe signals into one bounded confidence score for the
side chosen by the mode engine:
- Timeframe-weighted agreement with the final side (primary)
- Average uncertainty penalty (secondary)

The result is always within [0.50, 0.90].
"""

from abc import ABC, abstractmethod
from typing import Iterable
import math

from .signal_model import (
    Timeframe,
    TradeSide,
    PerTimeframeSignal,
    MetaConfidenceResult,
    ConfidenceBreakdown,
)


# Fixed per-timeframe weights; anything longer than 1h shares the 0.30 weight
TIMEFRAME_WEIGHTS = {
    Timeframe.M5: 0.30,
    Timeframe.H1: 0.40,
}
OTHER_TIMEFRAME_WEIGHT = 0.30

NEUTRAL_CONFIDENCE = 0.50
MAX_CONFIDENCE = 0.90
AGREEMENT_SCALE = 0.40
UNCERTAINTY_PENALTY_RATE = 0.50
MAX_UNCERTAINTY_PENALTY = 0.30
WEIGHT_FLOOR = 1e-9


def timeframe_weight(timeframe: Timeframe) -> float:
    """Static weight for a timeframe."""
    return TIMEFRAME_WEIGHTS.get(timeframe, OTHER_TIMEFRAME_WEIGHT)


def agreement_sign(side: TradeSide, final_side: TradeSide) -> float:
    """+1 when a frame agrees with the final side, -1 when opposed, 0 for hold."""
    if side == TradeSide.HOLD:
        return 0.0
    if side == final_side:
        return 1.0
    return -1.0


class MetaConfidenceCalculator(ABC):
    """Scoring policy interface: any implementation is substitutable."""

    @abstractmethod
    def compute_confidence(
        self,
        frames: Iterable[PerTimeframeSignal],
        final_side: TradeSide,
    ) -> MetaConfidenceResult:
        """
        Score confidence in final_side given the per-timeframe frames.

        Must be total: never raise for any frames or side.
        """
        pass


class SimpleMetaConfidenceCalculator(MetaConfidenceCalculator):
    """Weighted-agreement calculator with an uncertainty penalty."""

    def explain(
        self,
        frames: Iterable[PerTimeframeSignal],
        final_side: TradeSide,
    ) -> ConfidenceBreakdown:
        """
        Compute meta-confidence and keep every intermediate term.

        Agreement uses the absolute weighted sum, so strong disagreement
        lifts confidence exactly as much as strong agreement.

        Args:
            frames: Per-timeframe signals (may be empty, may repeat timeframes)
            final_side: Side chosen upstream

        Returns:
            ConfidenceBreakdown whose confidence is within [0.50, 0.90]
        """
        frames = list(frames)

        if final_side == TradeSide.HOLD:
            return ConfidenceBreakdown(
                final_side=final_side,
                num_frames=len(frames),
                weighted_agreement=0.0,
                total_weight=0.0,
                agreement=0.0,
                avg_uncertainty=0.0,
                uncertainty_penalty=0.0,
                confidence=NEUTRAL_CONFIDENCE,
            )

        weighted_agreement = 0.0
        total_uncertainty = 0.0
        total_weight = 0.0

        for frame in frames:
            weight = timeframe_weight(frame.timeframe)
            sign = agreement_sign(frame.side, final_side)
            weighted_agreement += weight * sign * frame.probability_upper_index
            total_uncertainty += frame.uncertainty
            total_weight += weight

        agreement = math.tanh(abs(weighted_agreement) / max(total_weight, WEIGHT_FLOOR))
        avg_uncertainty = total_uncertainty / len(frames) if frames else 0.0
        uncertainty_penalty = min(MAX_UNCERTAINTY_PENALTY, UNCERTAINTY_PENALTY_RATE * avg_uncertainty)

        meta = NEUTRAL_CONFIDENCE + AGREEMENT_SCALE * agreement - uncertainty_penalty
        meta = max(NEUTRAL_CONFIDENCE, min(MAX_CONFIDENCE, meta))

        return ConfidenceBreakdown(
            final_side=final_side,
            num_frames=len(frames),
            weighted_agreement=weighted_agreement,
            total_weight=total_weight,
            agreement=agreement,
            avg_uncertainty=avg_uncertainty,
            uncertainty_penalty=uncertainty_penalty,
            confidence=meta,
        )

    def compute_confidence(
        self,
        frames: Iterable[PerTimeframeSignal],
        final_side: TradeSide,
    ) -> MetaConfidenceResult:
        return MetaConfidenceResult(confidence=self.explain(frames, final_side).confidence)


_default_calculator = SimpleMetaConfidenceCalculator()


def compute_confidence(
    frames: Iterable[PerTimeframeSignal],
    final_side: TradeSide,
) -> MetaConfidenceResult:
    """Score frames with the default calculator."""
    return _default_calculator.compute_confidence(frames, final_side)
