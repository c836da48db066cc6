from .customer_repository import CustomerRepository
from .wallet_transaction_repository import WalletTransactionRepository
from .purchase_repository import PurchaseRepository
from .payment_repository import PaymentRepository
from .progress_invoice_repository import ProgressInvoiceRepository
from .waybill_repository import WaybillRepository
from .shop_product_repository import ShopProductRepository
from .staff_member_repository import StaffMemberRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "CustomerRepository",
    "WalletTransactionRepository",
    "PurchaseRepository",
    "PaymentRepository",
    "ProgressInvoiceRepository",
    "WaybillRepository",
    "ShopProductRepository",
    "StaffMemberRepository",
    "AuditLogRepository",
]
