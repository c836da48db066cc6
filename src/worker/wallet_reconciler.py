"""Wallet reconciliation worker

Runs ReconcileWalletBalances across every shop on a fixed interval and logs
each mismatch between a stored balance and its confirmed ledger entries.

    python -m src.worker.wallet_reconciler [--once]
"""

import argparse
import asyncio
import logging
from typing import Optional

from config import ApplicationConfig
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.wallet_transaction_repository import SqlAlchemyWalletTransactionRepository
from src.app.use_cases.wallet import ReconcileWalletBalances, ReconciliationResultDTO
from src.depends import AsyncSessionLocal, engine

logger = logging.getLogger(__name__)


class WalletReconcilerWorker:
    """Platform-wide, read-only reconciliation loop"""

    def __init__(self, session_factory=None, interval_seconds: Optional[int] = None):
        self.session_factory = session_factory or AsyncSessionLocal
        self.interval_seconds = (
            interval_seconds or ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS
        )
        self._stopped = asyncio.Event()

    async def run_once(self) -> Optional[ReconciliationResultDTO]:
        """
        Reconcile every customer once

        Returns:
            The reconciliation result, or None when reconciliation is disabled

        Raises:
            RuntimeError: If the ledger could not be read
        """
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Wallet reconciliation is disabled, skipping")
            return None

        async with self.session_factory() as session:
            result = await ReconcileWalletBalances(
                customer_repo=SqlAlchemyCustomerRepository(session),
                transaction_repo=SqlAlchemyWalletTransactionRepository(session),
            ).execute()

        if result.is_err():
            raise RuntimeError(f"Wallet reconciliation failed: {result.error.reason}")

        for d in result.value.discrepancies:
            logger.error(
                f"Wallet mismatch: customer {d.customer_id} (shop {d.shop_id}) "
                f"holds {d.wallet_balance}, ledger says {d.calculated_balance}"
            )
        return result.value

    async def run_forever(self):
        """Reconcile every interval_seconds until stop() is called"""
        logger.info(f"Wallet reconciliation every {self.interval_seconds}s")

        while not self._stopped.is_set():
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Wallet reconciliation cycle failed: {e}")

            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def stop(self):
        self._stopped.set()


async def _run(once: bool):
    worker = WalletReconcilerWorker()
    try:
        if once:
            await worker.run_once()
        else:
            await worker.run_forever()
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Wallet balance reconciliation")
    parser.add_argument("--once", action="store_true", help="Reconcile once and exit")
    args = parser.parse_args()

    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
    asyncio.run(_run(args.once))


if __name__ == "__main__":
    main()
