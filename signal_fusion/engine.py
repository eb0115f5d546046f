"""
Meta Signal Engine

Main orchestrator for multi-timeframe signal fusion.

Workflow:
1. Pick the final side with the mode engine
2. Score meta-confidence for that side
3. Render headline/detail text
4. Produce a JSON-serializable MetaSignal
5. Optionally turn an actionable signal into an OrderRequest
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging

from execution.order_types import OrderRequest, OrderSide

from .signal_model import TradeSide, PerTimeframeSignal
from .confidence import MetaConfidenceCalculator, SimpleMetaConfidenceCalculator
from .mode_engine import ModeEngine, SimpleModeEngine, PredictionMode
from .display import SimpleDisplayAdapter
from .config import DEFAULT_SIGNAL_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class MetaSignal:
    """Fused decision for one symbol."""
    symbol: str
    mode: PredictionMode
    final_side: TradeSide
    confidence: float
    headline: str
    detail: str
    notes: List[str] = field(default_factory=list)
    frames: List[PerTimeframeSignal] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def is_actionable(self, min_confidence: float = 0.6) -> bool:
        """Check if the signal is directional and meets the confidence threshold."""
        return self.final_side != TradeSide.HOLD and self.confidence >= min_confidence

    def to_dict(self) -> Dict[str, Any]:
        """Export to JSON-serializable dictionary."""
        return {
            'symbol': self.symbol,
            'mode': self.mode.value,
            'final_side': self.final_side.value,
            'confidence': round(self.confidence, 4),
            'headline': self.headline,
            'detail': self.detail,
            'notes': list(self.notes),
            'frames': [f.to_dict() for f in self.frames],
            'timestamp': self.timestamp,
        }

    def __str__(self) -> str:
        return f"MetaSignal({self.symbol} {self.mode.value}): {self.headline}"


class MetaSignalEngine:
    """Combine per-timeframe signals into a single tradeable decision."""

    def __init__(
        self,
        mode_engine: Optional[ModeEngine] = None,
        calculator: Optional[MetaConfidenceCalculator] = None,
        display: Optional[SimpleDisplayAdapter] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize signal engine.

        Args:
            mode_engine: Final-side policy (default SimpleModeEngine built from config)
            calculator: Meta-confidence policy (default SimpleMetaConfidenceCalculator)
            display: Text renderer (default SimpleDisplayAdapter)
            config: Signal config as returned by load_signal_config
        """
        self.config = config or DEFAULT_SIGNAL_CONFIG
        self.default_mode = PredictionMode(self.config.get('prediction_mode', 'normal'))
        self.min_confidence = float(self.config.get('min_confidence', 0.60))

        self.mode_engine = mode_engine or SimpleModeEngine(self.config.get('mode_thresholds'))
        self.calculator = calculator or SimpleMetaConfidenceCalculator()
        self.display = display or SimpleDisplayAdapter()

    def evaluate(
        self,
        frames: Iterable[PerTimeframeSignal],
        symbol: str,
        mode: Optional[PredictionMode] = None,
    ) -> MetaSignal:
        """
        Fuse frames into a MetaSignal.

        Args:
            frames: Per-timeframe signals for the symbol
            symbol: Trading pair (e.g., BTCUSDT)
            mode: Consensus mode (default from config)

        Returns:
            MetaSignal
        """
        frames = list(frames)
        mode = PredictionMode(mode) if mode is not None else self.default_mode

        decision = self.mode_engine.combine(frames, mode)
        meta = self.calculator.compute_confidence(frames, decision.final_side)
        rendered = self.display.render(decision.final_side, meta.confidence, frames)

        signal = MetaSignal(
            symbol=symbol.upper(),
            mode=mode,
            final_side=decision.final_side,
            confidence=meta.confidence,
            headline=rendered.headline,
            detail=rendered.detail,
            notes=list(decision.notes),
            frames=frames,
        )

        logger.info(
            f"[META] {signal.symbol} {mode.value}: {signal.final_side.value} "
            f"conf={signal.confidence:.2f} frames={len(frames)}"
            + (f" notes={signal.notes}" if signal.notes else "")
        )
        return signal

    def build_order_request(
        self,
        signal: MetaSignal,
        quantity: float,
        min_confidence: Optional[float] = None,
    ) -> Optional[OrderRequest]:
        """
        Turn an actionable signal into a market order request.

        Args:
            signal: Evaluated MetaSignal
            quantity: Order size in base units
            min_confidence: Override of the configured threshold

        Returns:
            OrderRequest, or None if the signal is HOLD or below threshold

        Raises:
            ValueError: If quantity is not positive
        """
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")

        threshold = self.min_confidence if min_confidence is None else min_confidence
        if not signal.is_actionable(threshold):
            logger.info(
                f"[META] {signal.symbol} not actionable "
                f"({signal.final_side.value}, conf={signal.confidence:.2f} < {threshold:.2f} or HOLD)"
            )
            return None

        return OrderRequest(
            symbol=signal.symbol,
            side=OrderSide.from_trade_side(signal.final_side),
            quantity=quantity,
            signal_confidence=signal.confidence,
            metadata={'mode': signal.mode.value, 'headline': signal.headline},
        )
