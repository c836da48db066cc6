"""Background workers for the wallet service"""
from .wallet_reconciler import WalletReconcilerWorker

__all__ = ["WalletReconcilerWorker"]
