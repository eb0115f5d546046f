"""
Signal Fusion Module

Fuses per-timeframe trade signals into one decision with a bounded
meta-confidence score.

Key Components:
- signal_model: Timeframe, TradeSide, PerTimeframeSignal, MetaConfidenceResult
- confidence: Meta-confidence scoring (always within 0.50-0.90)
- mode_engine: Final-side selection (normal majority / precision consensus)
- display: Headline and per-model text rendering
- engine: MetaSignalEngine orchestration
- config: YAML settings loader

Usage:
    from signal_fusion import MetaSignalEngine, PerTimeframeSignal, Timeframe, TradeSide

    engine = MetaSignalEngine()
    signal = engine.evaluate(
        frames=[PerTimeframeSignal(Timeframe.H1, TradeSide.LONG, 0.8, 0.1)],
        symbol='BTCUSDT',
    )
    print(signal.to_dict())
"""

from .signal_model import (
    Timeframe,
    TradeSide,
    PerTimeframeSignal,
    MetaConfidenceResult,
    ConfidenceBreakdown,
)
from .confidence import (
    MetaConfidenceCalculator,
    SimpleMetaConfidenceCalculator,
    compute_confidence,
)
from .mode_engine import PredictionMode, ModeProcessingResult, ModeEngine, SimpleModeEngine
from .display import DisplayResult, SimpleDisplayAdapter
from .engine import MetaSignal, MetaSignalEngine
from .config import load_signal_config, DEFAULT_SIGNAL_CONFIG, SignalConfigError

__all__ = [
    'Timeframe',
    'TradeSide',
    'PerTimeframeSignal',
    'MetaConfidenceResult',
    'ConfidenceBreakdown',
    'MetaConfidenceCalculator',
    'SimpleMetaConfidenceCalculator',
    'compute_confidence',
    'PredictionMode',
    'ModeProcessingResult',
    'ModeEngine',
    'SimpleModeEngine',
    'DisplayResult',
    'SimpleDisplayAdapter',
    'MetaSignal',
    'MetaSignalEngine',
    'load_signal_config',
    'DEFAULT_SIGNAL_CONFIG',
    'SignalConfigError',
]
