"""
Signal Display Formatting

Compact text rendering of a fused signal for dashboards and alerts.
"""

from dataclasses import dataclass
from typing import Iterable, Dict
import math

from .signal_model import Timeframe, TradeSide, PerTimeframeSignal


@dataclass(frozen=True)
class DisplayResult:
    """Headline such as "SHORT (77%)" plus a one-line per-model breakdown."""
    headline: str
    detail: str

    def to_dict(self) -> Dict[str, str]:
        return {'headline': self.headline, 'detail': self.detail}


def _percent(value: float) -> int:
    # Half-up rounding
    return int(math.floor(value * 100 + 0.5))


class SimpleDisplayAdapter:
    """Render final side, meta-confidence and per-timeframe frames as text."""

    def render(
        self,
        final_side: TradeSide,
        meta: float,
        frames: Iterable[PerTimeframeSignal],
    ) -> DisplayResult:
        if final_side == TradeSide.HOLD:
            headline = "HOLD / Neutral"
        else:
            headline = f"{final_side.value} ({_percent(meta)}%)"

        frames = list(frames)
        parts = []
        for tf in Timeframe:
            frame = next((f for f in frames if f.timeframe == tf), None)
            if frame is not None:
                parts.append(self._format_frame(frame))

        return DisplayResult(headline=headline, detail="Models: " + ", ".join(parts))

    @staticmethod
    def _format_frame(frame: PerTimeframeSignal) -> str:
        pct = "-" if frame.side == TradeSide.HOLD else f"{_percent(frame.probability_upper_index)}%"
        return f"{frame.timeframe.value}: {frame.side.value} ({pct})"
