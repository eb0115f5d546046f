"""
Tests for Meta-Confidence Calculation

Coverage:
- Output bounds for all inputs
- HOLD and empty-input neutrality
- Weighting, sign handling and uncertainty penalty
- Agreement/disagreement symmetry
- Monotonicity in signal strength
- Calculator substitutability
"""

import math
import random

import pytest

from signal_fusion import (
    Timeframe,
    TradeSide,
    PerTimeframeSignal,
    MetaConfidenceResult,
    MetaConfidenceCalculator,
    SimpleMetaConfidenceCalculator,
    compute_confidence,
)
from signal_fusion.confidence import timeframe_weight, agreement_sign


def frame(tf, side, p, u, gate_pass=True):
    return PerTimeframeSignal(tf, side, p, u, gate_pass)


@pytest.fixture
def aligned_frames():
    return [
        frame(Timeframe.M5, TradeSide.LONG, 0.8, 0.1),
        frame(Timeframe.H1, TradeSide.LONG, 0.9, 0.1),
        frame(Timeframe.H4, TradeSide.LONG, 0.7, 0.2),
    ]


# ============================================================================
# Building Blocks
# ============================================================================

class TestWeightsAndSigns:
    """Test static weights and agreement signs."""

    def test_timeframe_weights(self):
        assert timeframe_weight(Timeframe.M5) == 0.30
        assert timeframe_weight(Timeframe.H1) == 0.40
        assert timeframe_weight(Timeframe.H4) == 0.30

    def test_agreement_sign(self):
        assert agreement_sign(TradeSide.LONG, TradeSide.LONG) == 1.0
        assert agreement_sign(TradeSide.SHORT, TradeSide.LONG) == -1.0
        assert agreement_sign(TradeSide.HOLD, TradeSide.LONG) == 0.0
        assert agreement_sign(TradeSide.SHORT, TradeSide.SHORT) == 1.0
        assert agreement_sign(TradeSide.LONG, TradeSide.SHORT) == -1.0


# ============================================================================
# Neutral Cases
# ============================================================================

class TestNeutralCases:
    """HOLD and empty inputs always score 0.50."""

    def test_hold_returns_neutral(self, aligned_frames):
        result = compute_confidence(aligned_frames, TradeSide.HOLD)
        assert isinstance(result, MetaConfidenceResult)
        assert result.confidence == 0.50

    def test_empty_frames_returns_neutral(self):
        assert compute_confidence([], TradeSide.LONG).confidence == 0.50
        assert compute_confidence([], TradeSide.SHORT).confidence == 0.50

    def test_empty_frames_hold(self):
        assert compute_confidence([], TradeSide.HOLD).confidence == 0.50

    def test_hold_frame_only_penalty_clamped(self):
        """A lone HOLD frame adds no agreement; the penalty is clamped away."""
        frames = [frame(Timeframe.M5, TradeSide.HOLD, 0.5, 0.9)]
        assert compute_confidence(frames, TradeSide.LONG).confidence == 0.50

    def test_accepts_generator(self, aligned_frames):
        expected = compute_confidence(aligned_frames, TradeSide.LONG).confidence
        result = compute_confidence((f for f in aligned_frames), TradeSide.LONG)
        assert result.confidence == expected


# ============================================================================
# Formula
# ============================================================================

class TestFormula:
    """Check concrete values against the weighted-agreement formula."""

    def test_full_agreement_low_uncertainty(self, aligned_frames):
        # weighted agreement 0.3*0.8 + 0.4*0.9 + 0.3*0.7 = 0.81 over weight 1.0
        expected = 0.5 + 0.4 * math.tanh(0.81) - 0.5 * (0.4 / 3)
        result = compute_confidence(aligned_frames, TradeSide.LONG)
        assert result.confidence == pytest.approx(expected)
        assert result.confidence == pytest.approx(0.7012, abs=1e-3)

    def test_full_disagreement_is_symmetric(self, aligned_frames):
        """Absolute agreement: opposing frames lift confidence just as much."""
        agree = compute_confidence(aligned_frames, TradeSide.LONG).confidence
        disagree = compute_confidence(aligned_frames, TradeSide.SHORT).confidence
        assert disagree == pytest.approx(agree)

    def test_mixed_sides_cancel(self):
        frames = [
            frame(Timeframe.M5, TradeSide.LONG, 0.8, 0.0),
            frame(Timeframe.H4, TradeSide.SHORT, 0.8, 0.0),
        ]
        # 0.3*0.8 - 0.3*0.8 = 0
        assert compute_confidence(frames, TradeSide.LONG).confidence == pytest.approx(0.50)

    def test_hold_frames_dilute_agreement(self):
        only_long = [frame(Timeframe.H1, TradeSide.LONG, 0.9, 0.0)]
        with_hold = only_long + [frame(Timeframe.M5, TradeSide.HOLD, 0.9, 0.0)]

        conf_only = compute_confidence(only_long, TradeSide.LONG).confidence
        conf_hold = compute_confidence(with_hold, TradeSide.LONG).confidence

        assert conf_only == pytest.approx(0.5 + 0.4 * math.tanh(0.9))
        assert conf_hold == pytest.approx(0.5 + 0.4 * math.tanh(0.36 / 0.7))
        assert conf_hold < conf_only

    def test_duplicates_are_summed(self):
        single = [frame(Timeframe.H1, TradeSide.LONG, 0.8, 0.2)]
        doubled = single * 2
        # Ratio and average uncertainty are unchanged by exact duplicates
        assert compute_confidence(doubled, TradeSide.LONG).confidence == pytest.approx(
            compute_confidence(single, TradeSide.LONG).confidence
        )

    def test_order_does_not_matter(self, aligned_frames):
        forward = compute_confidence(aligned_frames, TradeSide.LONG).confidence
        backward = compute_confidence(list(reversed(aligned_frames)), TradeSide.LONG).confidence
        assert forward == pytest.approx(backward)

    def test_uncertainty_penalty_capped(self):
        frames = [frame(Timeframe.H1, TradeSide.LONG, 1.0, 1.0)]
        breakdown = SimpleMetaConfidenceCalculator().explain(frames, TradeSide.LONG)
        assert breakdown.uncertainty_penalty == pytest.approx(0.30)
        # 0.5 + 0.4*tanh(1) - 0.3 ~= 0.5046
        assert breakdown.confidence == pytest.approx(0.5 + 0.4 * math.tanh(1.0) - 0.3)

    def test_penalty_never_breaks_lower_bound(self):
        frames = [
            frame(Timeframe.M5, TradeSide.LONG, 0.2, 1.0),
            frame(Timeframe.H1, TradeSide.LONG, 0.1, 1.0),
            frame(Timeframe.H4, TradeSide.HOLD, 0.0, 1.0),
        ]
        assert compute_confidence(frames, TradeSide.LONG).confidence >= 0.50

    def test_out_of_range_strength_hits_upper_clamp(self):
        frames = [frame(Timeframe.H1, TradeSide.LONG, 10.0, 0.0)]
        assert compute_confidence(frames, TradeSide.LONG).confidence == pytest.approx(0.90)


# ============================================================================
# Properties
# ============================================================================

class TestProperties:
    """Bounds and monotonicity over many inputs."""

    def test_bounds_random_inputs(self):
        rng = random.Random(7)
        sides = list(TradeSide)
        for _ in range(500):
            frames = [
                frame(
                    rng.choice(list(Timeframe)),
                    rng.choice(sides),
                    rng.uniform(-2.0, 3.0),
                    rng.uniform(-1.0, 2.0),
                )
                for _ in range(rng.randint(0, 6))
            ]
            confidence = compute_confidence(frames, rng.choice(sides)).confidence
            assert 0.50 <= confidence <= 0.90

    def test_monotonic_in_strength(self):
        previous = 0.0
        for step in range(11):
            p = step / 10
            frames = [
                frame(Timeframe.M5, TradeSide.SHORT, 0.6, 0.0),
                frame(Timeframe.H1, TradeSide.SHORT, p, 0.0),
                frame(Timeframe.H4, TradeSide.SHORT, 0.5, 0.0),
            ]
            confidence = compute_confidence(frames, TradeSide.SHORT).confidence
            assert confidence >= previous
            previous = confidence

    def test_explain_matches_compute(self, aligned_frames):
        calc = SimpleMetaConfidenceCalculator()
        breakdown = calc.explain(aligned_frames, TradeSide.LONG)
        assert breakdown.confidence == calc.compute_confidence(aligned_frames, TradeSide.LONG).confidence
        assert breakdown.num_frames == 3
        assert breakdown.total_weight == pytest.approx(1.0)
        assert breakdown.weighted_agreement == pytest.approx(0.81)
        assert breakdown.to_dict()['final_side'] == 'LONG'


# ============================================================================
# Substitutability
# ============================================================================

class TestCalculatorInterface:
    """Alternative scoring policies plug in through the base class."""

    def test_abstract_base_not_instantiable(self):
        with pytest.raises(TypeError):
            MetaConfidenceCalculator()

    def test_custom_calculator(self):
        class FixedCalculator(MetaConfidenceCalculator):
            def compute_confidence(self, frames, final_side):
                return MetaConfidenceResult(confidence=0.75)

        calc = FixedCalculator()
        assert calc.compute_confidence([], TradeSide.LONG).confidence == 0.75

    def test_result_is_immutable(self):
        result = MetaConfidenceResult(confidence=0.6)
        with pytest.raises(AttributeError):
            result.confidence = 0.7
