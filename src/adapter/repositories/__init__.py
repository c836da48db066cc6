from .customer_repository import SqlAlchemyCustomerRepository
from .wallet_transaction_repository import SqlAlchemyWalletTransactionRepository
from .purchase_repository import SqlAlchemyPurchaseRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .progress_invoice_repository import SqlAlchemyProgressInvoiceRepository
from .waybill_repository import SqlAlchemyWaybillRepository
from .shop_product_repository import SqlAlchemyShopProductRepository
from .staff_member_repository import SqlAlchemyStaffMemberRepository
from .audit_log_repository import SqlAlchemyAuditLogRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyWalletTransactionRepository",
    "SqlAlchemyPurchaseRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyProgressInvoiceRepository",
    "SqlAlchemyWaybillRepository",
    "SqlAlchemyShopProductRepository",
    "SqlAlchemyStaffMemberRepository",
    "SqlAlchemyAuditLogRepository",
]
