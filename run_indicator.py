"""
Run the indicator engines over mock candles.
Run with: python run_indicator.py
"""

import asyncio
import json
import logging
import os
import sys

# Set working directory
base_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(base_dir)
sys.path.insert(0, base_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(base_dir, ".env"))

PAIRS = ["EURUSD", "GBPUSD", "USDJPY"]


async def run_indicators():
    """Calculate Quantum Edge and Smart Algo signals for a few mock pairs."""
    from fxsignal.core.config import settings
    from fxsignal.schemas.indicators import IndicatorName, SignalRequest
    from fxsignal.schemas.market import Timeframe
    from fxsignal.services.data_ingestion import generate_mock_candles
    from fxsignal.services.indicators import get_indicator_service

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("\n" + "=" * 60)
    print(f"{settings.app_name.upper()} v{settings.app_version} - INDICATOR RUN")
    print("=" * 60)

    service = get_indicator_service()

    for indicator in IndicatorName:
        print(f"\n[{indicator.value}]")
        print("-" * 40)

        requests = [
            SignalRequest(
                symbol=pair,
                timeframe=Timeframe.H1,
                indicator=indicator,
                candles=generate_mock_candles(
                    pair,
                    Timeframe.H1,
                    settings.mock_candle_count,
                    seed=settings.mock_seed + offset,
                ),
            )
            for offset, pair in enumerate(PAIRS)
        ]
        outputs = await service.calculate_batch(requests)

        for symbol, output in outputs.items():
            buys = sum(1 for e in output.events if e.signal.value == "BUY")
            sells = len(output.events) - buys
            print(
                f"{symbol}: {output.bars_processed} bars, {buys} buy / {sells} sell, "
                f"latest={output.latest_signal.value}"
            )
            for warning in output.warnings:
                print(f"  warning: {warning}")

        # Last five records of the first pair, as the chart front end receives them
        first = outputs.get(PAIRS[0])
        if first and first.results:
            last_five = [r.model_dump(mode="json", by_alias=True) for r in first.results[-5:]]
            print(f"\nLast 5 {PAIRS[0]} records:")
            print(json.dumps(last_five, indent=2))

    print("\n" + "=" * 60)
    print("RUN COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(run_indicators())
