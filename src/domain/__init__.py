from .base import BaseModel, generate_uuid
from .shop import Shop
from .staff_member import StaffMember, StaffRole
from .customer import Customer
from .wallet_transaction import (
    WalletTransaction,
    WalletTransactionType,
    WalletTransactionStatus,
    PaymentMethod,
)
from .purchase import Purchase, PurchaseItem, PurchaseStatus, PurchaseType, DeliveryStatus
from .shop_product import ShopProduct
from .payment import Payment, PaymentStatus
from .progress_invoice import ProgressInvoice
from .waybill import Waybill
from .audit_log import AuditLog, AuditMetadata, AllocationAuditEntry

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Shop",
    "StaffMember",
    "StaffRole",
    "Customer",
    "WalletTransaction",
    "WalletTransactionType",
    "WalletTransactionStatus",
    "PaymentMethod",
    "Purchase",
    "PurchaseItem",
    "PurchaseStatus",
    "PurchaseType",
    "DeliveryStatus",
    "ShopProduct",
    "Payment",
    "PaymentStatus",
    "ProgressInvoice",
    "Waybill",
    "AuditLog",
    "AuditMetadata",
    "AllocationAuditEntry",
]
