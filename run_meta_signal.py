"""
Meta Signal Runner

Fuses a file of per-timeframe signals into one decision, prints it as
JSON, and optionally submits the resulting order through the exchange
client allowed by the live-trading gate (paper unless both gates pass).

Usage:
    python run_meta_signal.py --frames examples/frames_btc.yaml
    python run_meta_signal.py --frames examples/frames_btc.yaml --mode precision --submit --quantity 0.01
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml
from dotenv import load_dotenv

from signal_fusion import (
    MetaSignalEngine,
    PerTimeframeSignal,
    PredictionMode,
    SimpleMetaConfidenceCalculator,
    load_signal_config,
    SignalConfigError,
)
from execution import Exchange, ExchangeError, create_exchange_client
from execution.live_trading_gate import LiveTradingGateError
from validation import ConfigValidationError, validate_signal_config


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[logging.StreamHandler(sys.stderr)]
)

logger = logging.getLogger(__name__)


def load_env():
    """Load exchange credentials (EXCHANGE_API_KEY, EXCHANGE_API_SECRET) from .env if present."""
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)


def load_frames(path: str) -> Tuple[Optional[str], List[PerTimeframeSignal]]:
    """
    Load frames from a JSON or YAML file.

    The file holds either a list of frame mappings or a mapping with
    'frames' (and optionally 'symbol').

    Returns:
        Tuple of (symbol or None, frames)

    Raises:
        ValueError: If the file content is not in one of those shapes or a
            frame is malformed
    """
    with open(path, 'r') as f:
        if Path(path).suffix.lower() == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    symbol = None
    if isinstance(data, dict):
        symbol = data.get('symbol')
        data = data.get('frames', [])

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of frames")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: frame {index} is not a mapping: {item!r}")

    return symbol, [PerTimeframeSignal.from_dict(item) for item in data]


async def submit_order(order, exchange: Optional[Exchange], config_dir: str) -> Dict[str, Any]:
    client, mode = create_exchange_client(
        exchange=exchange,
        config_path=os.path.join(config_dir, "trading_mode.yaml"),
        api_key=os.getenv("EXCHANGE_API_KEY"),
        api_secret=os.getenv("EXCHANGE_API_SECRET"),
    )
    logger.info(f"Submitting {order.side.value} {order.quantity} {order.symbol} via {client.exchange_name} ({mode})")
    try:
        fill = await client.place_market_order(order)
    except ExchangeError as e:
        logger.error(f"Order failed: {type(e).__name__}: {e}")
        return {'success': False, 'error': f"{type(e).__name__}: {e}"}
    return {'success': True, 'fill': fill.to_dict()}


def run(args: argparse.Namespace) -> int:
    config = load_signal_config(os.path.join(args.config_dir, "signal_fusion.yaml"))
    validate_signal_config(config)

    file_symbol, frames = load_frames(args.frames)
    symbol = args.symbol or file_symbol or "BTCUSDT"

    engine = MetaSignalEngine(config=config)
    signal = engine.evaluate(frames, symbol=symbol, mode=args.mode)

    output: Dict[str, Any] = {'signal': signal.to_dict()}
    if args.explain:
        breakdown = SimpleMetaConfidenceCalculator().explain(frames, signal.final_side)
        output['breakdown'] = breakdown.to_dict()

    if args.submit:
        order = engine.build_order_request(signal, quantity=args.quantity)
        exchange = Exchange(args.exchange) if args.exchange else None
        if order is None:
            output['order'] = {'success': False, 'error': 'signal not actionable'}
        else:
            output['order'] = asyncio.run(submit_order(order, exchange, args.config_dir))

    print(json.dumps(output, indent=2))
    return 0


def main():
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Fuse per-timeframe signals into a meta-confidence decision",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_meta_signal.py --frames examples/frames_btc.yaml
  python run_meta_signal.py --frames examples/frames_btc.yaml --explain
  python run_meta_signal.py --frames examples/frames_btc.yaml --submit --quantity 0.01 --exchange Kraken
        """
    )
    parser.add_argument('--frames', type=str, required=True,
                        help='JSON or YAML file with per-timeframe signals')
    parser.add_argument('--symbol', type=str, help='Trading pair (overrides the file)')
    parser.add_argument('--mode', type=str, choices=[m.value for m in PredictionMode],
                        help='Consensus mode (default from config)')
    parser.add_argument('--config-dir', type=str, default='config',
                        help='Directory holding trading_mode.yaml and signal_fusion.yaml')
    parser.add_argument('--explain', action='store_true',
                        help='Include the meta-confidence breakdown')
    parser.add_argument('--submit', action='store_true',
                        help='Submit an order if the signal is actionable')
    parser.add_argument('--quantity', type=float, default=0.01, help='Order size')
    parser.add_argument('--exchange', type=str, choices=[e.value for e in Exchange],
                        help='Target exchange (default from trading_mode.yaml)')

    args = parser.parse_args()
    load_env()

    try:
        sys.exit(run(args))
    except (OSError, ValueError, yaml.YAMLError, SignalConfigError,
            ConfigValidationError, LiveTradingGateError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
