"""
Signal Data Model

Per-timeframe signal observations and the meta-confidence value produced
from them. All records are immutable and JSON-friendly.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any


class Timeframe(str, Enum):
    """Analysis horizon a signal was derived from."""
    M5 = "5m"
    H1 = "1h"
    H4 = "4h"  # Longer horizons


class TradeSide(str, Enum):
    """Directional stance of a signal."""
    LONG = "LONG"
    SHORT = "SHORT"
    HOLD = "HOLD"

    @classmethod
    def from_string(cls, value: str) -> 'TradeSide':
        """Parse a side, accepting exchange-style BUY/SELL aliases."""
        side_map = {
            'LONG': cls.LONG,
            'BUY': cls.LONG,
            'SHORT': cls.SHORT,
            'SELL': cls.SHORT,
            'HOLD': cls.HOLD,
            'FLAT': cls.HOLD,
        }
        try:
            return side_map[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown trade side: {value!r}")

    @property
    def opposite(self) -> 'TradeSide':
        if self is TradeSide.LONG:
            return TradeSide.SHORT
        if self is TradeSide.SHORT:
            return TradeSide.LONG
        return TradeSide.HOLD


@dataclass(frozen=True)
class PerTimeframeSignal:
    """
    One upstream observation for a single timeframe.

    Attributes:
        timeframe: Horizon the analysis ran on
        side: Direction that timeframe favors
        probability_upper_index: Signal strength, nominally 0.0-1.0
        uncertainty: Noise/ambiguity of the signal, nominally 0.0-1.0
        gate_pass: Whether the upstream quality gate accepted the signal
    """
    timeframe: Timeframe
    side: TradeSide
    probability_upper_index: float
    uncertainty: float
    gate_pass: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Export to dictionary."""
        return {
            'timeframe': self.timeframe.value,
            'side': self.side.value,
            'probability_upper_index': self.probability_upper_index,
            'uncertainty': self.uncertainty,
            'gate_pass': self.gate_pass,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PerTimeframeSignal':
        """
        Build a signal from a parsed JSON/YAML mapping.

        Raises:
            ValueError: If timeframe or side is not recognised, or a
                required key is missing or holds a non-numeric value
        """
        try:
            timeframe = Timeframe(str(data['timeframe']).strip().lower())
            side = TradeSide.from_string(str(data['side']))
            probability = float(data['probability_upper_index'])
            uncertainty = float(data['uncertainty'])
        except KeyError as e:
            raise ValueError(f"Missing signal field: {e.args[0]}")
        except TypeError as e:
            raise ValueError(f"Malformed signal: {e}")

        return cls(
            timeframe=timeframe,
            side=side,
            probability_upper_index=probability,
            uncertainty=uncertainty,
            gate_pass=bool(data.get('gate_pass', True)),
        )


@dataclass(frozen=True)
class MetaConfidenceResult:
    """Overall confidence in the finalized side, always within 0.50-0.90."""
    confidence: float

    def to_dict(self) -> Dict[str, float]:
        return {'confidence': self.confidence}


@dataclass(frozen=True)
class ConfidenceBreakdown:
    """Intermediate terms of a meta-confidence computation."""
    final_side: TradeSide
    num_frames: int
    weighted_agreement: float
    total_weight: float
    agreement: float
    avg_uncertainty: float
    uncertainty_penalty: float
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        """Export to dictionary."""
        return {
            'final_side': self.final_side.value,
            'num_frames': self.num_frames,
            'weighted_agreement': round(self.weighted_agreement, 6),
            'total_weight': round(self.total_weight, 6),
            'agreement': round(self.agreement, 6),
            'avg_uncertainty': round(self.avg_uncertainty, 6),
            'uncertainty_penalty': round(self.uncertainty_penalty, 6),
            'confidence': round(self.confidence, 6),
        }
