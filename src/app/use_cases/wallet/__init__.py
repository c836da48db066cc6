"""Wallet ledger use cases"""
from .allocate_funds import PurchaseAllocationResolver, plan_allocations
from .create_wallet_deposit import CreateWalletDeposit
from .confirm_wallet_transaction import ConfirmWalletTransaction
from .reject_wallet_transaction import RejectWalletTransaction
from .adjust_wallet_balance import AdjustWalletBalance
from .confirm_all_for_actor import ConfirmAllForActor
from .list_wallet_transactions import ListWalletTransactions
from .reconcile_wallet_balances import ReconcileWalletBalances
from .errors import WalletErrorCode
from .dtos import (
    ActorDTO,
    CreateDepositCommandDTO,
    ConfirmTransactionCommandDTO,
    RejectTransactionCommandDTO,
    AdjustBalanceCommandDTO,
    ConfirmAllCommandDTO,
    ListTransactionsQueryDTO,
    WalletTransactionDTO,
    AllocationDTO,
    AllocationResultDTO,
    ConfirmTransactionResponseDTO,
    AdjustBalanceResponseDTO,
    BulkFailureDTO,
    ConfirmAllResponseDTO,
    ListWalletTransactionsResponseDTO,
    WalletDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "PurchaseAllocationResolver",
    "plan_allocations",
    "CreateWalletDeposit",
    "ConfirmWalletTransaction",
    "RejectWalletTransaction",
    "AdjustWalletBalance",
    "ConfirmAllForActor",
    "ListWalletTransactions",
    "ReconcileWalletBalances",
    "WalletErrorCode",
    "ActorDTO",
    "CreateDepositCommandDTO",
    "ConfirmTransactionCommandDTO",
    "RejectTransactionCommandDTO",
    "AdjustBalanceCommandDTO",
    "ConfirmAllCommandDTO",
    "ListTransactionsQueryDTO",
    "WalletTransactionDTO",
    "AllocationDTO",
    "AllocationResultDTO",
    "ConfirmTransactionResponseDTO",
    "AdjustBalanceResponseDTO",
    "BulkFailureDTO",
    "ConfirmAllResponseDTO",
    "ListWalletTransactionsResponseDTO",
    "WalletDiscrepancyDTO",
    "ReconciliationResultDTO",
]
