"""Wallet Transaction Repository Interface

Defines the contract for wallet ledger persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from src.domain.wallet_transaction import (
    WalletTransaction,
    WalletTransactionStatus,
)


class WalletTransactionRepository(ABC):
    """
    Repository interface for WalletTransaction persistence

    Transactions are append-only. The only mutation allowed is the single
    status transition out of PENDING, performed by transition_status as a
    compare-and-swap on the current status.
    """

    @abstractmethod
    async def create(self, transaction: WalletTransaction) -> WalletTransaction:
        """
        Create a new wallet transaction

        Args:
            transaction: WalletTransaction entity to persist

        Returns:
            Created WalletTransaction
        """
        pass

    @abstractmethod
    async def get_by_id(
        self,
        transaction_id: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ) -> Optional[WalletTransaction]:
        """
        Retrieve transaction by ID inside the caller's scope

        Args:
            transaction_id: Transaction ID
            shop_id: Only match transactions of this shop
            business_id: Only match transactions of shops owned by this business

        Returns:
            WalletTransaction if found inside the scope, None otherwise
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        transaction_id: str,
        new_status: WalletTransactionStatus,
        actor_id: Optional[str],
        at: datetime,
        balance_before: Optional[Decimal] = None,
        balance_after: Optional[Decimal] = None,
        rejected_reason: Optional[str] = None,
    ) -> bool:
        """
        Move a PENDING transaction to new_status

        The write is conditional on the row still being PENDING so that only
        one of several concurrent callers can win.

        Returns:
            True if this call performed the transition, False if the
            transaction was no longer PENDING
        """
        pass

    @abstractmethod
    async def list_pending_by_creator_name(
        self,
        creator_name: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ) -> List[WalletTransaction]:
        """
        PENDING transactions recorded by staff whose name matches
        creator_name case-insensitively, oldest first
        """
        pass

    @abstractmethod
    async def list_transactions(
        self,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[WalletTransactionStatus] = None,
        created_by_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[WalletTransaction]:
        pass

    @abstractmethod
    async def count_transactions(
        self,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[WalletTransactionStatus] = None,
        created_by_id: Optional[str] = None,
    ) -> int:
        pass

    @abstractmethod
    async def get_confirmed_sums_by_customer(
        self, shop_id: Optional[str] = None, business_id: Optional[str] = None
    ) -> Dict[str, Decimal]:
        """
        Signed sum of CONFIRMED transactions per customer

        Returns:
            Mapping of customer_id to the balance implied by the ledger.
            Customers without confirmed transactions are absent.
        """
        pass
