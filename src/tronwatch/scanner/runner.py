"""TRON transaction poller runner.

Derives HD addresses from the configured seed phrase, watches them and
logs every `transactions` event.

Usage:
    python -m tronwatch.scanner.runner --network shasta --index 100 --index 1000

Environment variables:
    WALLET_SEED_PHRASE: 12 word seed phrase (required)
    TRONGRID_API_KEY: Optional TronGrid API key
    POLL_INTERVAL_SECONDS: Seconds between cycles (default: 60)
"""

import argparse
import asyncio
import logging
import signal
import time

from tronwatch.config import NETWORKS, get_settings
from tronwatch.scanner.base import TransactionEvent
from tronwatch.scanner.events import TRANSACTIONS_EVENT
from tronwatch.wallet import TronWallet

logger = logging.getLogger(__name__)


def log_event(event: TransactionEvent) -> None:
    """Log a transactions event."""
    balance = event.balance.trx if event.balance else "unknown"
    logger.info(
        f"Event for {event.address}: txids={event.transactions.txids} "
        f"balance={balance} SUN"
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll TronGrid for new transactions")
    parser.add_argument(
        "--network",
        choices=sorted(NETWORKS),
        default=None,
        help="TRON network (default: TRON_NETWORK setting)",
    )
    parser.add_argument(
        "--index",
        action="append",
        default=[],
        help="HD index to derive and watch (repeatable)",
    )
    parser.add_argument(
        "--address",
        action="append",
        default=[],
        help="Extra address to watch (repeatable)",
    )
    parser.add_argument(
        "--since",
        type=int,
        default=None,
        help="Start cursor in ms since epoch (default: now minus backdate window)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run one cycle and exit",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()

    if not settings.has_wallet:
        logger.error("WALLET_SEED_PHRASE must be set to a 12 word phrase")
        return 1

    async with TronWallet(settings.wallet_seed_phrase, network=args.network) as tron:
        tron.on(TRANSACTIONS_EVENT, log_event)

        for index in args.index:
            address = await tron.get_hd_address(index)
            logger.info(f"Index {index}: {address}")
        tron.add_wallet(args.address)

        since = args.since
        if since is None:
            since = int(time.time() * 1000) - settings.backdate_ms

        if args.once:
            emitted = await tron.poller.run_cycle(since)
            logger.info(f"Cycle complete, {emitted} event(s)")
            return 0

        tron.start_polling(since)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, tron.stop_polling)
            except NotImplementedError:
                # Windows event loops
                pass

        await tron.poller.wait_stopped()

    return 0


def main() -> int:
    """Main entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return asyncio.run(run(parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
