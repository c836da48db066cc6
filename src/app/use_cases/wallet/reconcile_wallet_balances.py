"""ReconcileWalletBalances Use Case

Compares stored customer wallet balances against the ledger to detect
discrepancies.
"""

import logging
import time
from datetime import datetime
from decimal import Decimal
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from .dtos import ReconciliationResultDTO, WalletDiscrepancyDTO

logger = logging.getLogger(__name__)


class ReconcileWalletBalances:
    """
    Use Case: Reconcile wallet balances against confirmed transactions

    Business Rules:
    1. Expected balance = signed sum of the customer's CONFIRMED transactions
    2. Customers with no confirmed transactions are expected to hold 0
    3. Every mismatch is reported and logged
    4. Does NOT modify any data (read-only reconciliation)
    5. With a shop or business scope only that tenant's customers are checked;
       without one every customer is checked (background worker)
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        transaction_repo: WalletTransactionRepository,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ):
        self.customer_repo = customer_repo
        self.transaction_repo = transaction_repo
        self.shop_id = shop_id
        self.business_id = business_id

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            logger.info("Starting wallet balance reconciliation")

            # Step 1: Load customers and ledger sums
            customers = await self.customer_repo.get_all(
                shop_id=self.shop_id, business_id=self.business_id
            )
            sums = await self.transaction_repo.get_confirmed_sums_by_customer(
                shop_id=self.shop_id, business_id=self.business_id
            )

            logger.info(f"Found {len(customers)} customers to reconcile")

            # Step 2: Compare
            discrepancies = []
            for customer in customers:
                calculated = sums.get(customer.id, Decimal("0"))
                if customer.wallet_balance != calculated:
                    difference = customer.wallet_balance - calculated
                    discrepancies.append(
                        WalletDiscrepancyDTO(
                            customer_id=customer.id,
                            shop_id=customer.shop_id,
                            wallet_balance=customer.wallet_balance,
                            calculated_balance=calculated,
                            discrepancy=difference,
                        )
                    )
                    logger.warning(
                        f"Discrepancy found for customer {customer.id} (shop {customer.shop_id}): "
                        f"wallet_balance={customer.wallet_balance}, "
                        f"transaction_sum={calculated}, "
                        f"discrepancy={difference}"
                    )

            execution_time_ms = int((time.time() - start_time) * 1000)

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {len(customers)} customers in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {len(customers)} wallets balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(
                ReconciliationResultDTO(
                    total_customers_checked=len(customers),
                    discrepancies_found=len(discrepancies),
                    discrepancies=discrepancies,
                    reconciliation_time=reconciliation_time,
                    execution_time_ms=execution_time_ms,
                )
            )

        except Exception as e:
            logger.error(f"Wallet reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile wallet balances",
                    reason=str(e),
                )
            )
